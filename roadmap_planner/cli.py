"""
Command-Line Interface for the course roadmap planner.

Interactive mode asks for a dream occupation, draws the generated roadmap
and lets the student tick off subjects and open subject details:

    python -m roadmap_planner
    python -m roadmap_planner --occupation "Software Engineer" --json
    python -m roadmap_planner --list --relevant "Software Engineer"
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Callable, List, Optional

from .core.config import BaseSettings, get_settings, validate_configuration
from .core.dependencies import build_session
from .services.roadmap_session import RoadmapSession
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "  <number>    toggle completed\n"
    "  d <number>  show subject details\n"
    "  n           new occupation\n"
    "  q           quit"
)


def _configure_logging(settings: BaseSettings, verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-planner",
        description="AI-powered course roadmap for a dream occupation",
    )
    parser.add_argument("--catalog", type=Path, help="path to the syllabus JSON document")
    parser.add_argument("--occupation", help="generate one roadmap and exit")
    parser.add_argument("--json", action="store_true", help="print the view model as JSON")
    parser.add_argument("--list", action="store_true", help="list catalog subjects and exit")
    parser.add_argument("--year", type=int, help="with --list, only this year")
    parser.add_argument("--semester", type=int, help="with --list and --year, only this semester")
    parser.add_argument("--keywords", nargs="+", help="with --list, keyword search")
    parser.add_argument("--relevant", metavar="OCCUPATION", help="with --list, subjects relevant to an occupation")
    parser.add_argument("--threshold", type=float, help="relevance threshold for --relevant")
    parser.add_argument(
        "--enrich",
        nargs="?",
        const="",
        metavar="OCCUPATION",
        help="score catalog subjects for career relevance before anything else",
    )
    parser.add_argument("--output", type=Path, help="with --enrich, write the enriched catalog here")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


async def _list_subjects(session: RoadmapSession, args, settings: BaseSettings) -> int:
    repository = session.subject_repository
    if args.relevant:
        threshold = args.threshold if args.threshold is not None else settings.relevance_threshold
        subjects = await repository.filter_by_career_relevance(args.relevant, threshold)
    elif args.keywords:
        subjects = await repository.filter_by_keywords(args.keywords)
    elif args.year is not None and args.semester is not None:
        subjects = await repository.filter_by_year_semester(args.year, args.semester)
    elif args.year is not None:
        subjects = await repository.filter_by_year(args.year)
    else:
        subjects = await repository.load()

    TerminalDisplay.print_subjects(subjects, occupation=args.relevant)
    print(f"\n  Catalog total: {await repository.total_credits()} credits")
    return 0


async def _enrich(session: RoadmapSession, args) -> int:
    occupation = args.enrich or None
    changed = await session.enrich_catalog(occupation)
    TerminalDisplay.print_error(session.error)
    print(f"  Updated career relevance for {changed} subjects")

    if args.output:
        payload = {
            "subjects": [
                subject.model_dump(exclude_none=True)
                for subject in session.subject_repository.subjects
            ]
        }
        args.output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"  Wrote {args.output}")
    return 0 if session.error is None else 1


def _show(session: RoadmapSession, as_json: bool):
    view = session.view()
    if view is None:
        TerminalDisplay.print_error(session.error)
        return
    if as_json:
        print(view.model_dump_json(indent=2))
    else:
        TerminalDisplay.print_roadmap(view)


async def _interactive(session: RoadmapSession, read: Callable[[str], str]) -> int:
    if not session.llm_service.available():
        print(
            f"  {TerminalDisplay.YELLOW}Set OPENAI_API_KEY in your environment "
            f"to enable AI-powered roadmaps.{TerminalDisplay.RESET}"
        )
        return 1

    while True:
        occupation = read("\nWhat's your dream occupation? (q to quit) ").strip()
        if occupation.lower() == "q":
            return 0

        print(f"  {TerminalDisplay.DIM}Generating...{TerminalDisplay.RESET}")
        await session.generate(occupation)
        _show(session, as_json=False)
        if session.roadmap is None:
            continue

        next_step = await _roadmap_loop(session, read)
        if next_step == "q":
            return 0


async def _roadmap_loop(session: RoadmapSession, read: Callable[[str], str]) -> str:
    print(HELP_TEXT)
    while True:
        command = read("> ").strip().lower()
        if command in ("q", "n"):
            session.clear_selection()
            return command

        view = session.view()
        ids: List[str] = [node.id for node in view.nodes]
        show_detail = command.startswith("d")
        number = command[1:].strip() if show_detail else command

        if not number.isdigit() or not 1 <= int(number) <= len(ids):
            print(HELP_TEXT)
            continue

        node_id = ids[int(number) - 1]
        if show_detail:
            await session.select_node(node_id)
        else:
            session.toggle_completed(node_id)
        _show(session, as_json=False)


async def run(argv: Optional[List[str]] = None, read: Callable[[str], str] = input) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.semester is not None and args.year is None:
        parser.error("--semester requires --year")

    settings = get_settings()
    if args.catalog:
        settings = settings.model_copy(update={"catalog_path": args.catalog})
    _configure_logging(settings, args.verbose)

    try:
        for warning in validate_configuration(settings):
            logger.warning(warning)
    except ValueError as e:
        logger.error(f"Configuration validation failed: {e}")
        return 2

    session = build_session(settings)
    await session.start()
    TerminalDisplay.print_error(session.error)

    if args.enrich is not None:
        status = await _enrich(session, args)
        if status or not (args.list or args.occupation):
            return status

    if args.list:
        return await _list_subjects(session, args, settings)

    if args.occupation is not None:
        await session.generate(args.occupation)
        _show(session, as_json=args.json)
        return 0 if session.roadmap is not None else 1

    return await _interactive(session, read)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return asyncio.run(run(argv))
    except (KeyboardInterrupt, EOFError):
        print()
        return 130
