"""``skema routes`` — list routes as the generator will see them.

Prints GROUP, METHOD, TEMPLATE, and KEY for every route.  Nothing is
imported from the handler modules and nothing is written, so routes that
would fail naming or pattern validation show the error instead of a key.
"""

import argparse

from skema.cli._resolve import resolve_inputs
from skema.errors import NamingError, PathShapeError
from skema.generator.controllers import locate_module
from skema.routing.groups import match_group
from skema.routing.naming import name_route
from skema.routing.paths import resolve_method, to_template
from skema.routing.route import HandlerRef, RouteRecord


def _describe(route: RouteRecord) -> tuple[str, str]:
    """Return ``(template, key)`` for a route, or the reason it has none."""
    try:
        template = to_template(route.pattern)
    except PathShapeError as exc:
        return route.pattern, f"! {exc}"

    if not isinstance(route.handler, HandlerRef):
        return template, "- function handler"
    source_file = locate_module(route.handler.module)
    if source_file is None:
        return template, f"- module {route.handler.module!r} not found"
    try:
        return template, name_route(route.pattern, str(source_file)).key
    except NamingError as exc:
        return template, f"! {exc}"


def run_routes(args: argparse.Namespace) -> None:
    """List the route table named by ``args.routes``."""
    config, routes = resolve_inputs(args)

    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        template, key = _describe(route)
        group = match_group(route.pattern, config.groups)
        rows.append((group, resolve_method(route.methods), template, key))

    # Column widths
    max_group = max(max(len(r[0]) for r in rows), 5)  # "GROUP" header
    max_method = max(max(len(r[1]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[2]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_group}}}  {{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("GROUP", "METHOD", "PATH", "KEY"))
    sep_len = max_group + max_method + max_path + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
