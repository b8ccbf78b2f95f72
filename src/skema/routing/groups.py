"""Group matching — partition routes by configured path prefix.

First match wins, in configuration declaration order.  Overlapping
prefixes are never re-ordered by specificity::

    groups = {"api": "/api/", "api_admin": "/api/admin/"}
    match_group("/api/admin/users", groups)  # -> "api"
"""

from collections.abc import Iterable, Mapping

from skema.routing.route import RouteRecord

INTERNAL_GROUP = "internal"


def match_group(pattern: str, groups: Mapping[str, str]) -> str:
    """Return the first group whose prefix starts *pattern*, else ``"internal"``."""
    for key, prefix in groups.items():
        if pattern.startswith(prefix):
            return key
    return INTERNAL_GROUP


def group_routes(
    routes: Iterable[RouteRecord],
    groups: Mapping[str, str],
) -> dict[str, list[RouteRecord]]:
    """Partition *routes* by group.

    Routes keep table order within a group; groups appear in order of
    their first route.
    """
    result: dict[str, list[RouteRecord]] = {}
    for route in routes:
        result.setdefault(match_group(route.pattern, groups), []).append(route)
    return result
