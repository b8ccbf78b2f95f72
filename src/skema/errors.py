"""Skema exception hierarchy.

Shared across the generation pipeline, the runtime helpers, and the CLI
so every module raises and catches the same types.  Fatal errors carry
the offending route, segment, or name as attributes for diagnosis.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skema.routing.route import ParsedRoute


class SkemaError(Exception):
    """Base for all skema-specific errors."""


class ConfigurationError(SkemaError):
    """Raised when the groups configuration is missing or malformed.

    Raised at load time, before any route is inspected.
    """


class RouteSourceError(SkemaError):
    """Raised when the host route table cannot be resolved."""


class HandlerImportError(SkemaError):
    """Raised when importing a route's handler module fails."""

    def __init__(self, message: str, *, pattern: str, module: str) -> None:
        super().__init__(f"{message} (route {pattern!r}, module {module!r})")
        self.pattern = pattern
        self.module = module


class NamingError(SkemaError):
    """Raised when a handler module does not follow the ``*_controller`` naming rule."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class PathShapeError(SkemaError):
    """Raised when a route pattern contains a segment that cannot be emitted."""

    def __init__(self, message: str, *, pattern: str, segment: int) -> None:
        super().__init__(f"{message} (route {pattern!r}, segment {segment})")
        self.pattern = pattern
        self.segment = segment


class CollisionError(SkemaError):
    """Raised when two routes claim the same controller or the same name key."""

    def __init__(
        self,
        message: str,
        *,
        current: ParsedRoute,
        registered: ParsedRoute,
    ) -> None:
        super().__init__(message)
        self.current = current
        self.registered = registered


class ToolingError(SkemaError):
    """Raised when an external formatter, type-checker, or linter exits non-zero."""

    def __init__(
        self,
        name: str,
        returncode: int,
        *,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(f"{name} failed with exit code {returncode}")
        self.name = name
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class MissingParameterError(SkemaError, KeyError):
    """Raised when a path template references a parameter that was not supplied."""

    def __init__(self, name: str, template: str) -> None:
        super().__init__(name)
        self.name = name
        self.template = template

    def __str__(self) -> str:
        return f"Missing path parameter {self.name!r} for template {self.template!r}"
