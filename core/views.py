"""Views for LiveSplit upload analysis."""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from analysis.errors import LivesplitError
from core.forms import LivesplitUploadForm
from core.services import analysis_payload, analyze_livesplit_content

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def analyze_api(request: HttpRequest) -> JsonResponse:
    """Analyze an uploaded `.lss` file and return the result as JSON."""

    form = LivesplitUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return JsonResponse({"error": "invalid file.", "details": form.errors.get_json_data()}, status=400)

    content = form.cleaned_data["file"].read()
    try:
        report = analyze_livesplit_content(content)
    except LivesplitError as exc:
        logger.info("Rejected LiveSplit upload: %s", exc)
        return JsonResponse({"error": str(exc)}, status=400)

    return JsonResponse(analysis_payload(report))
