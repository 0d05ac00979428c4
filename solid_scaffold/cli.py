"""Command-line entry point for ``make-solid``.

Usage::

    make-solid Product
    make-solid Product --path V1/Admin --paginate 20 --test
    python -m solid_scaffold Product --root ../shop --force
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from solid_scaffold.config import Config, database_url_from_dotenv
from solid_scaffold.scaffolder.generator import ScaffoldError, ScaffoldOptions, SolidGenerator
from solid_scaffold.utils import console, print_error, print_info, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="make-solid",
        description=(
            "Create a SOLID architecture (Controller, Service, Repository, "
            "Interface, Requests) for an existing model"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  make-solid Product\n"
            "  make-solid Product --path V1/Admin --paginate 20\n"
            "  make-solid Product --test --force\n"
        ),
    )
    parser.add_argument("name", help="Name of the existing model")
    parser.add_argument(
        "--path",
        dest="custom_path",
        default=None,
        help="Custom controller path (e.g. V1/Admin)",
    )
    parser.add_argument(
        "--paginate",
        type=int,
        default=None,
        help="Items per page (default: 15)",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Also create the feature test file",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing files",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Laravel project root (default: $SOLID_ROOT or the current directory)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL used to read the model's table (default: derived from .env)",
    )
    parser.add_argument(
        "--no-database",
        action="store_true",
        help="Skip live table introspection and read migrations only",
    )
    return parser


def build_config(args: argparse.Namespace) -> Config:
    """Merge environment defaults with command-line overrides."""
    config = Config.from_env()
    if args.root:
        config.root_dir = Path(args.root)
    if args.paginate is not None:
        config.per_page = args.paginate

    if args.no_database:
        config.database_url = None
    elif args.database_url:
        config.database_url = args.database_url
    elif not config.database_url:
        config.database_url = database_url_from_dotenv(config.root_dir)
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``make-solid`` and ``python -m solid_scaffold``."""
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
        options = ScaffoldOptions(
            name=args.name,
            custom_path=args.custom_path,
            per_page=config.per_page,
            with_tests=args.test,
            force=args.force,
        )
    except ValidationError as e:
        print_error(f"Invalid arguments: {e}")
        sys.exit(1)

    console.print(f"[bold cyan]Creating SOLID architecture for: {options.name}[/bold cyan]")
    if options.custom_path:
        print_info(f"Controller path: {options.custom_path}")
    print_info(f"Pagination: {options.per_page} items per page")
    console.print()

    generator = SolidGenerator(config)
    try:
        generator.generate(options)
    except ScaffoldError as e:
        print_error(str(e))
        for hint in e.hints:
            print_info(f"   {hint}")
        sys.exit(1)

    console.print()
    print_success("SOLID architecture created successfully!")
    console.print()
    console.print(generator.next_steps(options), markup=False, highlight=False)


if __name__ == "__main__":
    main()
