"""Analyze a LiveSplit run-history file and print attempt statistics."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from analysis.aggregations import dedupe_percentiles
from analysis.errors import LivesplitError
from analysis.units import format_duration_ms, format_percentage
from core.services import LivesplitReport, analysis_payload, analyze_livesplit_path


class Command(BaseCommand):
    """Print completion, duration, and death statistics for a `.lss` file."""

    help = "Analyze a LiveSplit .lss file: completion rate, durations, and where attempts die."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("path", type=Path, help="Path to a LiveSplit .lss file.")
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the full analysis as JSON instead of a text report.",
        )
        parser.add_argument(
            "--require-attempts",
            action="store_true",
            default=None,
            help="Fail when the file contains no attempts.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path: Path = options["path"]
        as_json: bool = options["json"]
        require_attempts: bool | None = options["require_attempts"]

        if not path.is_file():
            raise CommandError(f"No such file: {path}")

        try:
            report = analyze_livesplit_path(path, require_attempts=require_attempts)
        except LivesplitError as exc:
            raise CommandError(str(exc)) from exc

        if as_json:
            self.stdout.write(json.dumps(analysis_payload(report), indent=2))
            return None

        for line in _report_lines(report):
            self.stdout.write(line)
        return None


def _report_lines(report: LivesplitReport) -> list[str]:
    """Render the plain-text report."""

    analysis = report.analysis
    summary = report.summary
    lines: list[str] = []

    title = " / ".join(part for part in (analysis.game_name, analysis.category_name) if part)
    if title:
        lines.append(title)

    attempts_line = f"Attempts: {summary.attempt_count}"
    if analysis.declared_attempt_count is not None:
        attempts_line += f" (LiveSplit counter: {analysis.declared_attempt_count})"
    lines.append(attempts_line)
    lines.append(
        f"Completed runs: {summary.completed_run_count} "
        f"({format_percentage(summary.completed_run_percentage)})"
    )
    lines.append(f"Total time: {format_duration_ms(analysis.total_duration)}")
    lines.append(f"Average attempt: {format_duration_ms(summary.average_duration)}")
    lines.append(f"Longest attempt: {format_duration_ms(analysis.longest_attempt_duration)}")
    personal_best = analysis.personal_best
    if personal_best is not None:
        lines.append(f"Personal best: {format_duration_ms(personal_best.total_duration)}")

    first_segment = analysis.segments[0]
    lines.append(
        f"Deaths before {first_segment.name}: {summary.deaths_before_first_split} "
        f"({format_percentage(summary.deaths_before_first_split_percentage)})"
    )
    deadliest = analysis.segment_by_id(summary.most_deadly_segment_id)
    if deadliest is not None:
        lines.append(
            f"Most deaths: {deadliest.name} "
            f"({format_percentage(summary.most_deadly_segment_percentage)})"
        )

    lines.append("Deaths by segment:")
    for name, deaths in summary.death_counts_by_segment_name:
        lines.append(f"  {name}: {deaths}")

    points = [point for point in dedupe_percentiles(analysis.percentiles) if point.segment_id is not None]
    if points:
        lines.append("Percentile death points:")
        for point in points:
            segment = analysis.segment_by_id(point.segment_id)
            name = segment.name if segment is not None else point.segment_id
            lines.append(f"  {round(point.percentile * 100)}%: {name}")

    return lines
