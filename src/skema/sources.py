"""Route sources — resolve the host application's route table.

A route source is anything that yields route entries, in registration
order:

- an iterable of ``RouteRecord`` or of mappings with ``pattern`` (or
  ``path``), ``methods``, and ``handler`` keys
- an object exposing ``.routes`` (a router or app), whose entries carry
  the same attributes
- a factory returning either of the above

Handlers may be ``"pkg.module"`` / ``"pkg.module:Symbol"`` strings,
``HandlerRef``s, or classes.  Plain functions are passed through and
skipped by the generator.  Router-native ``{name}`` / ``{name:type}``
parameters are rewritten to ``:name``.
"""

import importlib
import inspect
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from skema.config import SkemaConfig
from skema.errors import ConfigurationError, RouteSourceError, SkemaError
from skema.routing.paths import normalize_pattern
from skema.routing.route import HandlerRef, RouteRecord


def _field(entry: Any, *names: str) -> Any:
    for name in names:
        if isinstance(entry, Mapping):
            if name in entry:
                return entry[name]
        elif hasattr(entry, name):
            return getattr(entry, name)
    msg = f"Route entry {entry!r} has no {' or '.join(repr(n) for n in names)}"
    raise RouteSourceError(msg)


def _methods(methods: Any) -> tuple[str, ...]:
    if isinstance(methods, str):
        return (methods,)
    # Unordered sets sort so method resolution stays deterministic
    if isinstance(methods, (set, frozenset)):
        return tuple(sorted(methods))
    return tuple(methods)


def _handler(handler: Any) -> HandlerRef | Callable[..., Any]:
    if isinstance(handler, HandlerRef):
        return handler
    if isinstance(handler, str):
        return HandlerRef.parse(handler)
    if inspect.isclass(handler):
        return HandlerRef(module=handler.__module__, symbol=handler.__qualname__)
    if callable(handler):
        return handler
    msg = f"Unsupported route handler {handler!r}"
    raise RouteSourceError(msg)


def to_record(entry: Any) -> RouteRecord:
    """Normalize one route entry into a ``RouteRecord``."""
    if isinstance(entry, RouteRecord):
        return entry
    return RouteRecord(
        pattern=normalize_pattern(_field(entry, "pattern", "path")),
        methods=_methods(_field(entry, "methods")),
        handler=_handler(_field(entry, "handler")),
    )


def load_routes(source: Any) -> list[RouteRecord]:
    """Read a route source into an ordered list of ``RouteRecord``s."""
    routes = getattr(source, "routes", source)
    if callable(routes) and not isinstance(routes, Iterable):
        routes = routes()
    if not isinstance(routes, Iterable) or isinstance(routes, (str, bytes, Mapping)):
        msg = f"{type(source).__name__} is not a route source"
        raise RouteSourceError(msg)
    return [to_record(entry) for entry in routes]


def _import(
    import_string: str,
    default_attr: str,
    error: type[SkemaError] = RouteSourceError,
) -> Any:
    module_path, _, attr_name = import_string.partition(":")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as exc:
        msg = f"Unable to import {module_path!r}: {exc}"
        raise error(msg) from exc
    try:
        return getattr(module, attr_name or default_attr)
    except AttributeError as exc:
        msg = f"Module {module_path!r} has no attribute {attr_name or default_attr!r}"
        raise error(msg) from exc


def resolve_routes(import_string: str) -> list[RouteRecord]:
    """Resolve ``"module:attribute"`` to the host's route table.

    The attribute defaults to ``routes``.  Factories (callables that are
    not themselves route sources) are called with no arguments.
    """
    obj = _import(import_string, "routes")
    if callable(obj) and not hasattr(obj, "routes") and not isinstance(obj, Iterable):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise RouteSourceError(msg) from exc
    return load_routes(obj)


def resolve_config(import_string: str) -> SkemaConfig:
    """Resolve ``"module:attribute"`` to a ``SkemaConfig`` (attribute defaults to ``skema``)."""
    obj = _import(import_string, "skema", ConfigurationError)
    if not isinstance(obj, SkemaConfig):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, not a SkemaConfig. "
            "Make sure you are using define_config()"
        )
        raise ConfigurationError(msg)
    return obj
