"""Routing — route records, grouping, naming, and pattern validation.

Everything here is pure: the same route table and configuration always
produce the same groups, names, and templates.
"""

from skema.routing.groups import INTERNAL_GROUP, group_routes, match_group
from skema.routing.naming import name_route
from skema.routing.paths import resolve_method, to_template
from skema.routing.route import (
    ControllerRef,
    HandlerRef,
    ParsedRoute,
    PathSegment,
    RouteName,
    RouteRecord,
)

__all__ = [
    "INTERNAL_GROUP",
    "ControllerRef",
    "HandlerRef",
    "ParsedRoute",
    "PathSegment",
    "RouteName",
    "RouteRecord",
    "group_routes",
    "match_group",
    "name_route",
    "resolve_method",
    "to_template",
]
