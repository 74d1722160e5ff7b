"""Plain-text export of an analysis.

Output is byte-reproducible for a given analysis and date, so reports can
be compared against golden files.
"""

from datetime import date
from pathlib import Path

from src.core.schemas import Analysis


def _section(title: str, lines: list[str]) -> str:
    return "\n".join([f"--- {title} ---", *lines])


def render_report(analysis: Analysis, generated_on: date | None = None) -> str:
    """Render the preparation plan as text.

    Args:
        analysis: The analysis to export.
        generated_on: Date printed in the header; defaults to the
            analysis creation date in local time.
    """
    generated_on = generated_on or analysis.created_at.astimezone().date()
    header = "\n".join([
        "PLACEMENT PREPARATION PLAN",
        f"For: {analysis.role or 'Role'} at {analysis.company or 'Company'}",
        f"Date: {generated_on.isoformat()}",
        f"Readiness Score: {analysis.readiness_score}/100",
        f"Company Type: {analysis.company_intel.type.value or 'N/A'}",
    ])

    skills = [
        f"{category}: {', '.join(members)}"
        for category, members in analysis.extracted_skills.items()
    ]
    rounds = [f"{stage.title}: {stage.description}" for stage in analysis.round_mapping]
    plan = [
        "\n".join([f"{day}:", *(f"  - {task}" for task in tasks)])
        for day, tasks in analysis.plan.items()
    ]
    questions = [f"{i}. {q}" for i, q in enumerate(analysis.questions, start=1)]

    return "\n\n".join([
        header,
        _section("EXTRACTED SKILLS", skills),
        _section("ROUND MAPPING", rounds or ["N/A"]),
        _section("7-DAY PLAN", plan),
        _section("QUESTIONS", questions),
    ])


def report_filename(analysis: Analysis) -> str:
    """Default download name, e.g. ``plan-SDE-1.txt``."""
    return f"plan-{analysis.role or 'job'}.txt"


def write_report(
    analysis: Analysis,
    path: str | Path | None = None,
    generated_on: date | None = None,
) -> Path:
    """Write the report to path (or the default file name). Returns the path."""
    path = Path(path) if path is not None else Path(report_filename(analysis))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(analysis, generated_on) + "\n")
    return path
