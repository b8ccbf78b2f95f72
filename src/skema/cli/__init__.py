"""Skema CLI — client generation and route inspection.

Entry point registered as ``skema`` in ``pyproject.toml``::

    [project.scripts]
    skema = "skema.cli:main"
"""

import argparse
import sys


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "routes",
        help="Import string of the route table (e.g. myapp.routes:routes)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Import string of a SkemaConfig (default: [tool.skema] in pyproject.toml)",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root containing pyproject.toml (default: current directory)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``skema`` command."""
    parser = argparse.ArgumentParser(
        prog="skema",
        description="Skema — typed client bindings from your route table.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- skema generate ---------------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Generate the client package")
    _add_source_args(generate_parser)
    generate_parser.add_argument(
        "--output",
        default=None,
        help="Output directory, relative to the project root (default: client)",
    )
    generate_parser.add_argument(
        "--formatting",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run the formatter before and after generation",
    )
    generate_parser.add_argument(
        "--typechecking",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run the type-checker before generation",
    )
    generate_parser.add_argument(
        "--linting",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run the linter before generation",
    )
    generate_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report skipped routes and failures",
    )

    # -- skema routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes with their group and key")
    _add_source_args(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "generate":
        from skema.cli._generate import run_generate

        run_generate(args)
    elif args.command == "routes":
        from skema.cli._routes import run_routes

        run_routes(args)
