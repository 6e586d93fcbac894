"""CLI for admin tasks.

Why: Operative Tasks wie Rating-Reconciliation gehören in Admin-CLI,
     nicht in die HTTP-API.
"""

import argparse
import asyncio
import sys

from profrate.config.compose import Container, build_container
from profrate.infrastructure.logging.structlog_setup import configure_logging


def _fmt_rating(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}"


async def cmd_recompute(args, container: Container) -> int:
    """Recompute cached overall ratings for one or all professors.

    Args:
        args: Parsed arguments (professor_id)
        container: Wired dependencies

    Returns:
        Exit code (0=success, 1=failure)
    """
    uc = container.get_rating_recomputer()

    if args.professor_id:
        result = await uc.execute(args.professor_id)
        if not result.ok:
            print(f"✗ Failed: {result.error}")
            return 1
        print(f"✓ {args.professor_id}: {_fmt_rating(result.value)}")
        return 0

    result_all = await uc.execute_all()
    if not result_all.ok:
        print(f"✗ Failed: {result_all.error}")
        return 1
    ratings = result_all.value or {}
    for pid, value in ratings.items():
        print(f"  {pid}: {_fmt_rating(value)}")
    print(f"✓ Recomputed {len(ratings)} professors")
    return 0


async def cmd_top(args, container: Container) -> int:
    """Print the top-rated professors."""
    result = await container.get_professor_catalog().top_professors(args.limit)
    if not result.ok:
        print(f"✗ Failed: {result.error}")
        return 1
    for i, p in enumerate(result.value or [], 1):
        print(f"[{i}] {p.name} ({p.department}) rating={_fmt_rating(p.overall_rating)} id={p.id}")
    return 0


async def cmd_show(args, container: Container) -> int:
    """Print one professor with its reviews."""
    result = await container.get_professor_catalog().get_professor(args.professor_id)
    if not result.ok or result.value is None:
        print(f"✗ Failed: {result.error}")
        return 1
    p = result.value
    print(f"{p.name} - {p.department}")
    print(f"Overall rating: {_fmt_rating(p.overall_rating)} ({len(p.reviews)} reviews)")
    for r in p.reviews:
        print(f"  [{r.rating}/5] {r.username}: {r.comment} (id={r.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="profrate-admin",
        description="Admin tasks for the professor review catalog",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_recompute = sub.add_parser("recompute", help="Recompute cached overall ratings")
    p_recompute.add_argument("--professor-id", help="Only this professor (default: all)")
    p_recompute.set_defaults(func=cmd_recompute)

    p_top = sub.add_parser("top", help="List top-rated professors")
    p_top.add_argument("--limit", type=int, default=None, help="How many (default: settings)")
    p_top.set_defaults(func=cmd_top)

    p_show = sub.add_parser("show", help="Show one professor with reviews")
    p_show.add_argument("professor_id")
    p_show.set_defaults(func=cmd_show)

    return parser


async def _run(args, container: Container) -> int:
    try:
        return await args.func(args, container)
    finally:
        await container.aclose()


def main(argv: list[str] | None = None, container: Container | None = None) -> int:
    args = build_parser().parse_args(argv)
    container = container or build_container()
    configure_logging(container.settings.log_level, container.settings.log_json)
    return asyncio.run(_run(args, container))


if __name__ == "__main__":
    sys.exit(main())
