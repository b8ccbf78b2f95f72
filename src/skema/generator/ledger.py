"""Run-wide uniqueness ledger for accepted routes.

Two indexes, by controller module and by name key, so each collision
can report the route that registered first.
"""

from skema.errors import CollisionError
from skema.routing.route import ParsedRoute


class RouteLedger:
    """Accepted routes of one generation run, indexed for collision checks."""

    __slots__ = ("_by_controller", "_by_key")

    def __init__(self) -> None:
        self._by_controller: dict[str, ParsedRoute] = {}
        self._by_key: dict[str, ParsedRoute] = {}

    def check(self, route: ParsedRoute) -> None:
        """Raise ``CollisionError`` if *route* clashes with an accepted route.

        A controller may back a single route, and name keys are unique.
        """
        registered = self._by_controller.get(route.controller.path)
        if registered is not None:
            msg = f"The controller {route.controller.path!r} is already registered"
            raise CollisionError(msg, current=route, registered=registered)

        registered = self._by_key.get(route.name.key)
        if registered is not None:
            msg = (
                f"The route key {route.name.key!r} ({route.pattern!r}) has already "
                f"been registered by {registered.pattern!r}"
            )
            raise CollisionError(msg, current=route, registered=registered)

    def admit(self, route: ParsedRoute) -> None:
        """Record an accepted route. Call ``check()`` first."""
        self._by_controller[route.controller.path] = route
        self._by_key[route.name.key] = route

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: str) -> bool:
        return key in self._by_key
