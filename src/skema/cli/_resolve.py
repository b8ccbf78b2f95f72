"""Config and route-table resolution shared by ``skema generate`` and ``skema routes``."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from skema.config import SkemaConfig, load_config, validate_output
from skema.errors import SkemaError
from skema.routing.route import RouteRecord
from skema.sources import resolve_config, resolve_routes


def resolve_inputs(args: argparse.Namespace) -> tuple[SkemaConfig, list[RouteRecord]]:
    """Load the configuration and route table named by *args*.

    The project root is put on ``sys.path`` so host modules import the
    same way they do under the app.  Prints the error and exits with
    code 1 on failure.
    """
    root = Path(args.root).resolve()
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    try:
        if args.config:
            config = replace(resolve_config(args.config), root=root)
        else:
            config = load_config(root)
        if getattr(args, "output", None):
            config = replace(config, output=args.output)
        validate_output(config.root, config.output)
        routes = resolve_routes(args.routes)
    except SkemaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    return config, routes
