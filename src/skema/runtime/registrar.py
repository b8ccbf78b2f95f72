"""Route registration — the runtime half of a generated client.

Generated schema modules call ``register()`` once per route::

    UsersShowRoute = RouteIO[UsersShowRouteInput, UsersShowRouteOutput, UsersShowRouteParams]

    routes: Final = {
        "USERS_SHOW": register(UsersShowRoute, form=False, path="/users/{{ id }}", method="GET"),
    }

    routes["USERS_SHOW"].path({"id": 42})  # -> "/users/42"

``path()`` takes the route's ``params`` shape.  Routes whose input has no
``params`` member are tagged with ``None`` and their ``path()`` takes no
argument, so type checkers reject both a missing and a misspelled
parameter.

Descriptors are frozen and stateless, safe to share across threads and
event loops.
"""

from dataclasses import dataclass
from typing import Any, overload

from skema.runtime.interpolation import interpolate
from skema.runtime.types import RouteIO


@dataclass(frozen=True, slots=True)
class RouteDescriptor[I, O, P]:
    """Static metadata for one route plus a parameterized path builder.

    ``io`` is the ``RouteIO[I, O, P]`` type tag. It exists for type
    checkers only and carries no data.
    """

    template: str
    method: str
    form: bool
    io: type[RouteIO[I, O, P]]

    @overload
    def path(self: "RouteDescriptor[Any, Any, None]") -> str: ...

    @overload
    def path(self, params: P) -> str: ...

    def path(self, params: Any = None) -> str:
        """Build the request path, substituting *params* into the template."""
        return interpolate(self.template, params)


def register[I, O, P](
    io: type[RouteIO[I, O, P]],
    *,
    path: str,
    method: str,
    form: bool,
) -> RouteDescriptor[I, O, P]:
    """Wrap a route's static metadata into a ``RouteDescriptor``."""
    return RouteDescriptor(template=path, method=method, form=form, io=io)
