"""CLI entry point for the placement prep engine."""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

from src.core.config import Settings
from src.core.db import init_db
from src.core.schemas import SKILL_CATEGORIES, Analysis
from src.core.store import AnalysisStore, SqliteBackend
from src.pipeline.confidence import apply_toggle, effective_status, focus_areas, skill_status
from src.pipeline.report import render_report, report_filename, write_report
from src.pipeline.session import EmptyJobDescriptionError, PrepSession


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    parser = argparse.ArgumentParser(
        description="Placement prep engine - turn a job description into a preparation plan",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- analyze ---
    analyze_parser = subparsers.add_parser(
        "analyze", parents=[common], help="Analyze a job description",
    )
    analyze_parser.add_argument(
        "--jd",
        required=True,
        help="Path to a job description text file, or '-' for stdin",
    )
    analyze_parser.add_argument("--role", default="", help="Target role (e.g. SDE-1)")
    analyze_parser.add_argument("--company", default="", help="Company name")
    analyze_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for question selection (default: random)",
    )

    # --- history ---
    subparsers.add_parser("history", parents=[common], help="List saved analyses")

    # --- show ---
    show_parser = subparsers.add_parser("show", parents=[common], help="Print an analysis report")
    show_parser.add_argument("id", help="Analysis id")

    # --- toggle ---
    toggle_parser = subparsers.add_parser(
        "toggle", parents=[common], help="Flip a skill between know and practice",
    )
    toggle_parser.add_argument("id", help="Analysis id")
    toggle_parser.add_argument("skill", help="Skill name as extracted (e.g. React)")

    # --- export ---
    export_parser = subparsers.add_parser(
        "export", parents=[common], help="Write an analysis report to a text file",
    )
    export_parser.add_argument("id", help="Analysis id")
    export_parser.add_argument(
        "--output",
        default=None,
        help="Output path (default: plan-<role>.txt)",
    )

    # --- clear ---
    subparsers.add_parser("clear", parents=[common], help="Delete all saved analyses")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> Settings:
    if path is None:
        return Settings()
    return Settings.from_yaml(path)


def open_store(settings: Settings) -> AnalysisStore:
    conn = init_db(settings.database.path)
    return AnalysisStore(SqliteBackend(conn), settings.database.storage_key)


def read_jd(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        msg = f"Job description file not found: {path}"
        raise FileNotFoundError(msg)
    return path.read_text()


def print_summary(analysis: Analysis) -> None:
    """Print the key parts of an analysis."""
    intel = analysis.company_intel
    print(f"Analysis {analysis.id}")
    print(f"  Role: {analysis.role or 'Untitled Role'}")
    print(f"  Company: {intel.name} ({intel.type.value}, {intel.size}, {intel.industry})")
    print(f"  Hiring focus: {intel.focus}")
    print(f"  Readiness: {analysis.readiness_score}/100")

    print("\nSkills:")
    for category in SKILL_CATEGORIES:
        skills = analysis.extracted_skills.get(category, [])
        if not skills:
            continue
        tagged = [
            f"{s} [{effective_status(skill_status(analysis, s)).value}]" for s in skills
        ]
        print(f"  {category}: {', '.join(tagged)}")

    print("\nRounds:")
    for i, stage in enumerate(analysis.round_mapping, start=1):
        print(f"  {i}. {stage.title}: {stage.description}")
        print(f"     Why: {stage.purpose}")

    focus = focus_areas(analysis)
    print(f"\nFocus next on: {', '.join(focus)}")


async def cmd_analyze(args: argparse.Namespace, settings: Settings) -> None:
    """Handle analyze subcommand."""
    text = read_jd(args.jd)
    store = open_store(settings)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = PrepSession(store, settings, rng=rng)

    print("Analyzing job description...")
    result = await session.submit(text, role=args.role, company=args.company)
    for warning in result.warnings:
        print(f"Warning: {warning}")
    if not result.saved:
        print("Warning: analysis could not be saved", file=sys.stderr)

    print_summary(result.analysis)
    print(f"\nRun: python main.py show {result.analysis.id}")


def cmd_history(settings: Settings) -> None:
    """Handle history subcommand."""
    history = open_store(settings).list()
    if not history:
        print("No history found yet. Run: python main.py analyze --jd <file>")
        return
    for item in history:
        company = f" @ {item.company}" if item.company else ""
        created = item.created_at.astimezone().strftime("%b %d %H:%M")
        print(
            f"{item.id}  {item.role or 'Untitled Role'}{company}  "
            f"{created}  score {item.readiness_score}"
        )


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    """Handle show subcommand."""
    analysis = open_store(settings).get_by_id(args.id)
    if analysis is None:
        print(f"Error: analysis '{args.id}' not found", file=sys.stderr)
        return 1
    print(render_report(analysis))
    return 0


def cmd_toggle(args: argparse.Namespace, settings: Settings) -> int:
    """Handle toggle subcommand."""
    store = open_store(settings)
    analysis = store.get_by_id(args.id)
    if analysis is None:
        print(f"Error: analysis '{args.id}' not found", file=sys.stderr)
        return 1
    if args.skill not in analysis.all_skills():
        print(
            f"Error: '{args.skill}' is not an extracted skill. "
            f"Choose from: {', '.join(analysis.all_skills())}",
            file=sys.stderr,
        )
        return 1

    updated = apply_toggle(
        store, args.id, args.skill,
        step=settings.confidence.step,
        max_score=settings.scoring.max_score,
    )
    if updated is None:
        print("Error: could not save the change", file=sys.stderr)
        return 1
    status = updated.skill_confidence[args.skill].value
    print(f"{args.skill}: {status}")
    print(f"Readiness: {analysis.readiness_score} -> {updated.readiness_score}/100")
    return 0


def cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    """Handle export subcommand."""
    analysis = open_store(settings).get_by_id(args.id)
    if analysis is None:
        print(f"Error: analysis '{args.id}' not found", file=sys.stderr)
        return 1
    path = write_report(analysis, args.output or report_filename(analysis))
    print(f"Report written to {path}")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    code = 0
    if args.command == "analyze":
        try:
            asyncio.run(cmd_analyze(args, settings))
        except (FileNotFoundError, EmptyJobDescriptionError) as e:
            print(f"Error: {e}", file=sys.stderr)
            code = 1
    elif args.command == "history":
        cmd_history(settings)
    elif args.command == "show":
        code = cmd_show(args, settings)
    elif args.command == "toggle":
        code = cmd_toggle(args, settings)
    elif args.command == "export":
        code = cmd_export(args, settings)
    elif args.command == "clear":
        open_store(settings).clear_all()
        print("History cleared.")

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
