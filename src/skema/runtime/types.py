"""Static typing vocabulary shared by host applications and generated clients.

``Controller`` is the capability a route handler class declares:

- a ``handle`` method (its return annotation is the response shape)
- optionally ``input``: the class describing the validated request data,
  whose ``params`` member types the path parameters
- optionally ``form``: ``True`` when the route expects a form submission

``RouteIO`` is a pure type tag: generated clients alias
``RouteIO[Input, Output, Params]`` per route so the descriptors they build
carry the request, response, and path-parameter shapes for type checkers,
with nothing stored at runtime.  ``Params`` is ``None`` for routes whose
input declares no ``params``.
"""

from typing import Any, NoReturn, Protocol, runtime_checkable


@runtime_checkable
class Controller(Protocol):
    """A route handler class. ``input`` and ``form`` are optional members."""

    def handle(self, *args: Any, **kwargs: Any) -> Any: ...


class RouteIO[I, O, P]:
    """Type tag carrying a route's input, output, and path-parameter shapes. Never instantiated."""

    __slots__ = ()

    input: I
    output: O
    params: P

    def __new__(cls, *args: Any, **kwargs: Any) -> NoReturn:
        msg = "RouteIO is a type tag and cannot be instantiated"
        raise TypeError(msg)
