"""Integration tests for the analyze_livesplit management command."""

from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

pytestmark = pytest.mark.integration


def test_analyze_livesplit_prints_text_report(sample_lss_path) -> None:
    """The text report mirrors the headline statistics."""

    stdout = StringIO()
    call_command("analyze_livesplit", str(sample_lss_path), stdout=stdout)
    output = stdout.getvalue()

    assert "Celeste / Any%" in output
    assert "Attempts: 4 (LiveSplit counter: 4)" in output
    assert "Completed runs: 1 (25%)" in output
    assert "Total time: 9 minutes and 10 seconds" in output
    assert "Average attempt: 2 minutes and 17 seconds" in output
    assert "Longest attempt: 5 minutes" in output
    assert "Personal best: 5 minutes" in output
    assert "Deaths before Forsaken City: 1 (25%)" in output
    assert "Most deaths: Forsaken City (25%)" in output
    assert "  Old Site: 1" in output
    assert "  50%: Celestial Resort" in output
    assert "75%" not in output


def test_analyze_livesplit_json_output(sample_lss_path) -> None:
    """`--json` prints the serialized analysis."""

    stdout = StringIO()
    call_command("analyze_livesplit", str(sample_lss_path), "--json", stdout=stdout)
    payload = json.loads(stdout.getvalue())

    assert payload["summary"]["attempt_count"] == 4
    assert payload["declared_attempt_count"] == 4
    assert payload["summary"]["personal_best_id"] == "4"
    assert [segment["total_deaths"] for segment in payload["segments"]] == [1, 1, 1]
    assert payload["percentile_death_points"] == [{"percentile": 0.5, "segment_id": "segment-2"}]


def test_analyze_livesplit_rejects_missing_file(tmp_path) -> None:
    """A path that does not exist is a command error."""

    with pytest.raises(CommandError):
        call_command("analyze_livesplit", str(tmp_path / "missing.lss"))


def test_analyze_livesplit_surfaces_parse_errors(tmp_path) -> None:
    """Malformed documents surface as command errors, not tracebacks."""

    path = tmp_path / "broken.lss"
    path.write_text("<Run><Segments>", encoding="utf-8")

    with pytest.raises(CommandError, match="not valid XML"):
        call_command("analyze_livesplit", str(path))


def test_analyze_livesplit_require_attempts(tmp_path) -> None:
    """`--require-attempts` rejects documents without attempts."""

    path = tmp_path / "empty.lss"
    path.write_text("<Run><Segments><Segment><Name>A</Name></Segment></Segments></Run>", encoding="utf-8")

    stdout = StringIO()
    call_command("analyze_livesplit", str(path), stdout=stdout)
    assert "Average attempt: invalid" in stdout.getvalue()

    with pytest.raises(CommandError, match="does not contain any attempts"):
        call_command("analyze_livesplit", str(path), "--require-attempts")
