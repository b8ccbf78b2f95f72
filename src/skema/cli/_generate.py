"""``skema generate`` — client generation command.

Resolves the route table and configuration, runs the generation pipeline,
and prints a summary.  Exits with code 1 on any fatal error.
"""

import argparse
import logging
import sys

import anyio

from skema.cli._resolve import resolve_inputs
from skema.errors import SkemaError
from skema.generator.pipeline import GenerateOptions, Generator


def _configure_logging(quiet: bool) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("skema")
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING if quiet else logging.INFO)


def run_generate(args: argparse.Namespace) -> None:
    """Generate the client package for the route table named by ``args.routes``."""
    _configure_logging(args.quiet)
    config, routes = resolve_inputs(args)

    generator = Generator(
        config,
        routes,
        options=GenerateOptions(
            formatting=args.formatting,
            typechecking=args.typechecking,
            linting=args.linting,
        ),
    )

    try:
        result = anyio.run(generator.run)
    except SkemaError as exc:
        # Tool output has already been logged line by line
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print()
    print(result.summary())
