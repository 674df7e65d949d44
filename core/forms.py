"""Forms for core upload workflows."""

from __future__ import annotations

from django import forms
from django.conf import settings


class LivesplitUploadForm(forms.Form):
    """Validate a user-submitted LiveSplit `.lss` file."""

    file = forms.FileField(
        label="LiveSplit file",
        help_text="Upload a LiveSplit splits file (.lss).",
    )

    def clean_file(self):
        """Reject uploads larger than `TIMELOSS_MAX_UPLOAD_BYTES`.

        Returns:
            The uploaded file as received.
        """

        upload = self.cleaned_data["file"]
        limit = settings.TIMELOSS_MAX_UPLOAD_BYTES
        if upload.size > limit:
            raise forms.ValidationError(f"File is too large ({upload.size} bytes; limit is {limit} bytes).")
        return upload
