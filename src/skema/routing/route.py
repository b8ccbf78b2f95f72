"""Route records and parsed-route frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from skema.generator.shapes import ShapeSet


@dataclass(frozen=True, slots=True)
class HandlerRef:
    """Where a route's handler lives: a dotted module path and an optional export name."""

    module: str
    symbol: str | None = None

    @classmethod
    def parse(cls, reference: str) -> HandlerRef:
        """Parse ``"pkg.mod"`` or ``"pkg.mod:Symbol"``."""
        module, _, symbol = reference.partition(":")
        return cls(module=module, symbol=symbol or None)

    def __str__(self) -> str:
        return f"{self.module}:{self.symbol}" if self.symbol else self.module


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """A raw route as known to the host router. Immutable pipeline input.

    ``methods`` keeps declaration order — method resolution depends on it.
    ``handler`` is a ``HandlerRef`` or, for function routes, the callable
    itself (such routes are skipped).
    """

    pattern: str
    methods: tuple[str, ...]
    handler: HandlerRef | Callable[..., Any]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``users``  (is_param=False)
    Param:   ``:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteName:
    """Derived identifiers: ``key`` (UPPER_SNAKE) and ``type`` (``<Pascal>Route``)."""

    key: str
    type: str


@dataclass(frozen=True, slots=True)
class ControllerRef:
    """A resolved handler module.

    ``path`` is the module path used for uniqueness checks; ``relative``
    is the handler file relative to the group's output directory.
    """

    path: str
    relative: str


@dataclass(frozen=True, slots=True)
class ParsedRoute:
    """A validated route, ready for emission."""

    pattern: str
    path: str
    method: str
    form: bool
    controller: ControllerRef
    name: RouteName
    shapes: ShapeSet | None = None
