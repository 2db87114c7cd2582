import argparse
import sys
from typing import Iterable, TextIO

from . import __version__
from .config import ConfigError, load_settings
from .env import load_env
from .logger import get_logger
from .mealdb import MealDBClient
from .render import render_error, render_recipe
from .session import BrowseSession

BROWSE_HELP = """Commands:
  n            next recipe
  c <name>     filter by category (e.g. c Vegetarian)
  a <name>     filter by cuisine/area (e.g. a Italian)
  x            clear filter
  copy         print the ingredient list
  h            show this help
  q            quit"""


def build_session(args: argparse.Namespace) -> BrowseSession:
    try:
        settings = load_settings()
    except ConfigError as e:
        raise SystemExit(f"Configuration error: {e}")
    get_logger().set_level(settings.log_level)

    cache_size = args.cache_size if getattr(args, "cache_size", None) is not None else settings.cache_size
    max_attempts = args.max_attempts if getattr(args, "max_attempts", None) is not None else settings.max_attempts
    if cache_size < 0:
        raise SystemExit("--cache-size must be >= 0")
    if max_attempts < 1:
        raise SystemExit("--max-attempts must be >= 1")

    session = BrowseSession(MealDBClient(settings), cache_capacity=cache_size, max_attempts=max_attempts)
    if getattr(args, "category", None):
        session.set_category(args.category)
    elif getattr(args, "area", None):
        session.set_area(args.area)
    return session


def show_next(session: BrowseSession, out: TextIO) -> None:
    try:
        recipe = session.next_recipe()
    except ValueError as e:
        get_logger().error("Failed to fetch recipe", error=str(e), filter=session.filter)
        print(render_error(str(e)), file=out)
        return
    print(render_recipe(recipe), file=out)


def cmd_random(args: argparse.Namespace) -> None:
    if args.count < 1:
        raise SystemExit("--count must be >= 1")
    session = build_session(args)
    for _ in range(args.count):
        show_next(session, sys.stdout)
    get_logger().log_metrics_summary()


def cmd_categories(args: argparse.Namespace) -> None:
    session = build_session(args)
    try:
        names = session.client.list_categories()
    except ValueError as e:
        raise SystemExit(str(e))
    print("Categories:")
    for name in names:
        print(f" - {name}")


def cmd_areas(args: argparse.Namespace) -> None:
    session = build_session(args)
    try:
        names = session.client.list_areas()
    except ValueError as e:
        raise SystemExit(str(e))
    print("Cuisines:")
    for name in names:
        print(f" - {name}")


def browse_loop(session: BrowseSession, lines: Iterable[str], out: TextIO) -> None:
    """Drive a session from command lines (see BROWSE_HELP)."""
    show_next(session, out)
    for line in lines:
        cmd, _, rest = line.strip().partition(" ")
        cmd = cmd.lower()
        rest = rest.strip()
        if not cmd:
            continue
        if cmd in ("q", "quit", "exit"):
            break
        if cmd in ("n", "next"):
            show_next(session, out)
        elif cmd == "c":
            if not rest:
                print("[error] usage: c <category>", file=out)
                continue
            session.set_category(rest)
            show_next(session, out)
        elif cmd == "a":
            if not rest:
                print("[error] usage: a <area>", file=out)
                continue
            session.set_area(rest)
            show_next(session, out)
        elif cmd == "x":
            session.clear_filter()
            show_next(session, out)
        elif cmd == "copy":
            try:
                print(session.copy_text(), end="", file=out)
                print("Ingredients copied!", file=out)
            except ValueError as e:
                print(f"[error] {e}", file=out)
        elif cmd in ("h", "help", "?"):
            print(BROWSE_HELP, file=out)
        else:
            print(f"[error] unknown command: {cmd} (h for help)", file=out)


def cmd_browse(args: argparse.Namespace) -> None:
    session = build_session(args)
    print(BROWSE_HELP)
    browse_loop(session, sys.stdin, sys.stdout)
    get_logger().log_metrics_summary()


def _add_selection_options(p: argparse.ArgumentParser) -> None:
    group = p.add_mutually_exclusive_group()
    group.add_argument("--category", help="Dietary/meal category filter, e.g. Vegetarian or Vegan")
    group.add_argument("--area", help="Cuisine/area filter, e.g. Italian or Japanese")
    p.add_argument("--cache-size", type=int, help="Recently shown recipes to avoid (0 disables; default from MEALPICKER_CACHE_SIZE or 10)")
    p.add_argument("--max-attempts", type=int, help="Random draws before the recency cache is reset (default 5)")


def main(argv=None):
    # Load .env if present (MEALDB_API_KEY, MEALPICKER_CACHE_SIZE, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="mealpicker", description="Random recipe browser for TheMealDB")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    rnd = subparsers.add_parser("random", help="Show one or more random recipes")
    _add_selection_options(rnd)
    rnd.add_argument("--count", type=int, default=1, help="Number of recipes to show (default 1)")
    rnd.set_defaults(func=cmd_random)

    brw = subparsers.add_parser("browse", help="Interactive browser reading commands from stdin")
    _add_selection_options(brw)
    brw.set_defaults(func=cmd_browse)

    cat = subparsers.add_parser("categories", help="List meal categories usable with --category")
    cat.set_defaults(func=cmd_categories)

    area = subparsers.add_parser("areas", help="List cuisines usable with --area")
    area.set_defaults(func=cmd_areas)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
