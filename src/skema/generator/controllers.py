"""Controller validation — does a handler module honor the ``Controller`` contract?

A route's handler module must expose a class (its *default export*) with
a ``handle`` method and, optionally, an object-shaped ``input`` and a
boolean ``form``.  The default export is the module-level ``default``
binding when present, otherwise the class named after the module::

    # app/controllers/show_user_controller.py
    class ShowUserController:
        input: type[ShowUserInput]
        form = False

        async def handle(self, request) -> UserPayload: ...

Violations are not errors: each produces a ``ControllerSkip`` carrying the
reason, and the pipeline leaves the route out of the generated client.
"""

import importlib.util
import inspect
import typing
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Literal, get_args, get_origin

from skema.generator.shapes import is_object_shape, unwrap_classvar
from skema.routing.naming import pascal_case

_MISSING = object()


@dataclass(frozen=True, slots=True)
class ControllerContract:
    """What a valid controller declares: its form flag and I/O annotations."""

    cls: type
    form: bool
    input: Any | None
    output: Any


@dataclass(frozen=True, slots=True)
class ControllerSkip:
    """Why a controller was rejected."""

    reason: str


def locate_module(module_name: str) -> Path | None:
    """Return the source file of *module_name* without importing it, or ``None``."""
    try:
        spec = importlib.util.find_spec(module_name)
    except (ModuleNotFoundError, ValueError):
        return None
    if spec is None or not spec.origin or not spec.has_location:
        return None
    return Path(spec.origin).resolve()


def default_export(module: ModuleType) -> Any:
    """Return the module's default export, or ``_MISSING``.

    ``default`` wins; otherwise the PascalCase of the module's last
    dotted segment (``show_user_controller`` -> ``ShowUserController``).
    """
    if "default" in vars(module):
        return vars(module)["default"]
    conventional = pascal_case(module.__name__.rpartition(".")[2])
    return vars(module).get(conventional, _MISSING)


def _resolve_export(module: ModuleType, symbol: str | None) -> Any:
    if symbol is None:
        return default_export(module)
    obj: Any = module
    for part in symbol.split("."):
        obj = getattr(obj, part, _MISSING)
        if obj is _MISSING:
            break
    return obj


def _input_type(cls: type, hints: dict[str, Any]) -> Any:
    """The declared input shape: ``input: type[X]``, ``input: X``, or ``input = X``."""
    if "input" in hints:
        annotation = unwrap_classvar(hints["input"])
        if get_origin(annotation) is type:
            args = get_args(annotation)
            return args[0] if args else Any
        return annotation
    value = inspect.getattr_static(cls, "input", None)
    return value if inspect.isclass(value) else None


def _is_bool_type(annotation: Any) -> bool:
    annotation = unwrap_classvar(annotation)
    if annotation is bool:
        return True
    if get_origin(annotation) is Literal:
        return all(isinstance(arg, bool) for arg in get_args(annotation))
    return False


def inspect_controller(
    module: ModuleType,
    symbol: str | None = None,
) -> ControllerContract | ControllerSkip:
    """Validate the controller exported by *module*.

    Checks, in order: export exists, export is a class, ``handle`` exists,
    ``input`` is object-shaped, ``form`` is a boolean.  The first failing
    check returns a ``ControllerSkip``.
    """
    export = _resolve_export(module, symbol)
    if export is _MISSING:
        target = f"export {symbol!r}" if symbol else "the default export"
        return ControllerSkip(f"Unable to find {target} in {module.__name__!r}")

    if not inspect.isclass(export):
        return ControllerSkip(
            f"The default export is not a class (got {type(export).__name__})",
        )

    handle = getattr(export, "handle", None)
    if handle is None:
        return ControllerSkip('Unable to find the "handle" method')

    try:
        hints = typing.get_type_hints(export)
    except (NameError, TypeError) as exc:
        return ControllerSkip(f"Unable to resolve class annotations: {exc}")

    input_type = None
    if "input" in hints or hasattr(export, "input"):
        input_type = _input_type(export, hints)
        if input_type is None or not is_object_shape(input_type):
            return ControllerSkip('The "input" property is not an object')

    form = False
    if "form" in hints or hasattr(export, "form"):
        value = inspect.getattr_static(export, "form", _MISSING)
        if "form" in hints:
            if not _is_bool_type(hints["form"]):
                return ControllerSkip('The "form" property is not a boolean')
        elif not isinstance(value, bool):
            return ControllerSkip('The "form" property is not a boolean')
        form = value if isinstance(value, bool) else False

    output: Any = Any
    if callable(handle):
        try:
            output = typing.get_type_hints(handle).get("return", Any)
        except (NameError, TypeError) as exc:
            return ControllerSkip(f'Unable to resolve the "handle" return annotation: {exc}')

    return ControllerContract(cls=export, form=form, input=input_type, output=output)
