"""Type annotation to JSON shape projection.

Inspects a controller's declared types and renders what the server will
actually serialize as concrete Python type expressions and ``TypedDict``
declarations for the generated client module.

Projection rules:

- ``Any``, unresolved references, type variables -> ``Any``
- ``str``, ``int``, ``float``, ``bool``, ``None``, ``Literal`` -> unchanged
- ``Enum`` -> ``Literal`` of member values
- ``datetime``, ``date``, ``time``, ``UUID``, ``Decimal``, paths, bytes -> ``str``
- callables, classes, iterators -> not serializable: dropped from objects,
  ``None`` inside sequences
- sequences and sets -> ``list[X]``; fixed tuples element-wise
- mappings -> ``dict[str, X]``
- ``to_json()`` / ``__json__()`` -> the method's return annotation
- ``NamedTuple`` -> tuple of its fields
- dataclasses, ``TypedDict``, pydantic models, annotated classes -> ``TypedDict``
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import decimal
import enum
import keyword
import pathlib
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union, get_args, get_origin

# Rendered as JSON strings by the server's encoder
_STRING_LIKE: tuple[type, ...] = (
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    decimal.Decimal,
    pathlib.PurePath,
    bytes,
    bytearray,
)

_PRIMITIVES: dict[type, str] = {
    str: "str",
    int: "int",
    float: "float",
    bool: "bool",
}

_SEQUENCE_ORIGINS = frozenset({
    list,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
})

_MAPPING_ORIGINS = frozenset({
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
})

_OPAQUE_ORIGINS = frozenset({
    type,
    collections.abc.Callable,
    collections.abc.Iterator,
    collections.abc.Iterable,
    collections.abc.Generator,
    collections.abc.AsyncIterator,
    collections.abc.AsyncIterable,
    collections.abc.AsyncGenerator,
    collections.abc.Awaitable,
    collections.abc.Coroutine,
})

_AWAITABLE_ORIGINS = frozenset({
    collections.abc.Awaitable,
    collections.abc.Coroutine,
})


@dataclass(frozen=True, slots=True)
class ShapeField:
    """One key of a generated ``TypedDict``."""

    name: str
    type: str
    required: bool = True


@dataclass(frozen=True, slots=True)
class TypedDictShape:
    """A generated ``TypedDict`` declaration."""

    name: str
    fields: tuple[ShapeField, ...]

    @property
    def functional(self) -> bool:
        """True when a key is not a valid identifier (needs the call syntax)."""
        return any(
            not f.name.isidentifier() or keyword.iskeyword(f.name) for f in self.fields
        )

    def render(self) -> str:
        """Render the declaration as Python source."""
        if self.functional:
            items = ", ".join(f"{f.name!r}: {_field_type(f)!r}" for f in self.fields)
            return f"{self.name} = TypedDict({self.name!r}, {{{items}}})\n"

        lines = [f"class {self.name}(TypedDict):"]
        if not self.fields:
            lines.append("    pass")
        lines.extend(f"    {f.name}: {_field_type(f)}" for f in self.fields)
        return "\n".join(lines) + "\n"


def _field_type(f: ShapeField) -> str:
    return f.type if f.required else f"NotRequired[{f.type}]"


@dataclass(frozen=True, slots=True)
class ShapeSet:
    """Projected input/output shapes for one route.

    ``input`` and ``output`` are type expressions (``None`` when the route
    has no input or a non-object output).  ``params`` is the type of the
    input's ``params`` member, ``None`` when it has none.  ``declarations``
    lists the ``TypedDict``s they reference; ``typing_names`` the ``typing``
    imports the rendered source needs.
    """

    input: str | None
    output: str | None
    params: str | None = None
    declarations: tuple[TypedDictShape, ...] = ()
    typing_names: frozenset[str] = frozenset()

    def io_alias(self, name: str) -> str:
        """Render ``<name> = RouteIO[<input>, <output>, <params>]``."""
        return (
            f"{name} = RouteIO[{self.input or 'None'}, {self.output or 'None'}, "
            f"{self.params or 'None'}]\n"
        )


# ---------------------------------------------------------------------------
# Type classification
# ---------------------------------------------------------------------------


def unwrap_classvar(annotation: Any) -> Any:
    """``ClassVar[X]`` -> ``X``; anything else unchanged."""
    if get_origin(annotation) is ClassVar:
        args = get_args(annotation)
        return args[0] if args else Any
    return annotation


def unwrap_awaitable(annotation: Any) -> Any:
    """``Awaitable[X]`` / ``Coroutine[..., ..., X]`` -> ``X``."""
    while get_origin(annotation) in _AWAITABLE_ORIGINS:
        args = get_args(annotation)
        annotation = args[-1] if args else Any
    return annotation


def is_typeddict(tp: Any) -> bool:
    return typing.is_typeddict(tp)


def is_pydantic_model(tp: Any) -> bool:
    return isinstance(tp, type) and isinstance(getattr(tp, "model_fields", None), dict)


def is_namedtuple(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, tuple) and hasattr(tp, "_fields")


def is_object_shape(tp: Any) -> bool:
    """Return True if *tp* describes keyed JSON data.

    Dataclasses, ``TypedDict``, ``NamedTuple``, pydantic models, mappings,
    and classes with field annotations qualify.  Primitives, sequences,
    enums, and unannotated classes do not.
    """
    tp = _strip_wrappers(tp)
    if get_origin(tp) in _MAPPING_ORIGINS or tp in _MAPPING_ORIGINS:
        return True
    if get_origin(tp) is not None:
        return False
    if not isinstance(tp, type):
        return False
    if tp in _PRIMITIVES or issubclass(tp, (enum.Enum, *_STRING_LIKE)):
        return False
    if is_typeddict(tp) or is_namedtuple(tp) or is_pydantic_model(tp):
        return True
    if dataclasses.is_dataclass(tp):
        return True
    if issubclass(tp, (str, int, float, list, tuple, set, frozenset)):
        return False
    return bool(_class_fields(tp))


def _strip_wrappers(tp: Any) -> Any:
    """Remove ``Annotated``, ``NewType``, and ``type X = ...`` alias wrappers."""
    while True:
        if get_origin(tp) is typing.Annotated:
            tp = get_args(tp)[0]
        elif isinstance(tp, typing.NewType):
            tp = tp.__supertype__
        elif isinstance(tp, typing.TypeAliasType):
            tp = tp.__value__
        else:
            return tp


def _class_fields(tp: type) -> list[tuple[str, Any, bool]]:
    """Return ``(name, annotation, required)`` for each serialized field of *tp*."""
    try:
        hints = typing.get_type_hints(tp)
    except (NameError, TypeError):
        hints = {}

    if is_typeddict(tp):
        required = getattr(tp, "__required_keys__", frozenset(hints))
        return [(name, hint, name in required) for name, hint in hints.items()]

    if dataclasses.is_dataclass(tp):
        return [(f.name, hints.get(f.name, Any), True) for f in dataclasses.fields(tp)]

    if is_pydantic_model(tp):
        fields = tp.model_fields
        return [(name, hints.get(name, info.annotation), True) for name, info in fields.items()]

    return [
        (name, hint, True)
        for name, hint in hints.items()
        if get_origin(hint) is not ClassVar and hint is not ClassVar
    ]


def _json_method(tp: type) -> Any:
    """Return the return annotation of ``to_json()``/``__json__()``, or ``None``."""
    for attr in ("to_json", "__json__"):
        method = getattr(tp, attr, None)
        if method is None or not callable(method):
            continue
        try:
            hints = typing.get_type_hints(method)
        except (NameError, TypeError):
            return Any
        return hints.get("return", Any)
    return None


# ---------------------------------------------------------------------------
# Projector
# ---------------------------------------------------------------------------


class ShapeProjector:
    """Projects annotations for one route, collecting the ``TypedDict``s they need.

    Generated names are prefixed with the route's type name so shapes from
    different routes in the same module never clash.
    """

    __slots__ = ("_declarations", "_names", "_prefix", "_typing")

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._names: dict[type, str] = {}
        self._declarations: dict[str, TypedDictShape | None] = {}
        self._typing: set[str] = set()

    def project(self, annotation: Any, *, name: str | None = None) -> str | None:
        """Project *annotation*; ``None`` means it does not serialize at all.

        *name* overrides the generated name when the annotation itself
        becomes a ``TypedDict``.
        """
        return self._project(annotation, name)

    def project_object(self, annotation: Any, *, name: str) -> str | None:
        """Project *annotation* only if the result is object-like JSON.

        Used for handler output: a scalar or optional response has no shape,
        while an unannotated (``Any``) response stays ``Any``.
        """
        names = dict(self._names)
        declarations = dict(self._declarations)
        typing_names = set(self._typing)

        expr = self._project(annotation, name)
        if expr is not None and (
            expr == "Any"
            or expr in self._declarations
            or expr.startswith(("dict[", "list[", "tuple["))
        ):
            return expr

        # Roll back shapes only the discarded expression referenced
        self._names = names
        self._declarations = declarations
        self._typing = typing_names
        return None

    def member_type(self, shape: str | None, member: str) -> str | None:
        """Type expression of *member* in the generated ``TypedDict`` *shape*, if any."""
        declaration = self._declarations.get(shape) if shape else None
        if declaration is None:
            return None
        for f in declaration.fields:
            if f.name == member:
                return f.type
        return None

    def declarations(self) -> tuple[TypedDictShape, ...]:
        return tuple(d for d in self._declarations.values() if d is not None)

    def typing_names(self) -> frozenset[str]:
        names = set(self._typing)
        decls = self.declarations()
        if decls:
            names.add("TypedDict")
        if any(not f.required for d in decls for f in d.fields):
            names.add("NotRequired")
        return frozenset(names)

    # -- dispatch ----------------------------------------------------------

    def _project(self, tp: Any, name: str | None = None) -> str | None:
        tp = _strip_wrappers(tp)

        if tp is Any or tp is object:
            return self._any()
        if tp is None or tp is type(None):
            return "None"
        if isinstance(tp, (str, typing.ForwardRef, typing.TypeVar)):
            return self._any()

        origin = get_origin(tp)
        if origin is not None:
            return self._project_generic(tp, origin, get_args(tp))

        if not isinstance(tp, type):
            return self._any()
        return self._project_class(tp, name)

    def _project_generic(self, tp: Any, origin: Any, args: tuple[Any, ...]) -> str | None:
        if origin is Literal:
            self._typing.add("Literal")
            return f"Literal[{', '.join(repr(a) for a in args)}]"

        if origin is Union or origin is types.UnionType:
            return self._union(args)

        if origin in _OPAQUE_ORIGINS:
            return None

        if origin is tuple:
            return self._tuple(args)

        if origin in _SEQUENCE_ORIGINS:
            item = self._project(args[0]) if args else self._any()
            return f"list[{item or 'None'}]"

        if origin in _MAPPING_ORIGINS:
            value = self._project(args[1]) if len(args) == 2 else self._any()
            return f"dict[str, {value or 'None'}]"

        # Parameterized user generic such as Page[User]: project the class itself
        if isinstance(origin, type):
            return self._project_class(origin, None)
        return self._any()

    def _project_class(self, tp: type, name: str | None) -> str | None:
        if tp in _PRIMITIVES:
            return _PRIMITIVES[tp]

        if issubclass(tp, enum.Enum):
            return self._enum(tp)

        if issubclass(tp, _STRING_LIKE):
            return "str"

        json_annotation = _json_method(tp)
        if json_annotation is not None:
            return self._project(json_annotation, name)

        if is_namedtuple(tp):
            return self._tuple(tuple(hint for _, hint, _ in _class_fields(tp)))

        for base, expr in ((bool, "bool"), (int, "int"), (float, "float"), (str, "str")):
            if issubclass(tp, base):
                return expr

        if tp is tuple or tp in _SEQUENCE_ORIGINS:
            return f"list[{self._any()}]"
        if tp in _MAPPING_ORIGINS:
            return f"dict[str, {self._any()}]"
        if tp in _OPAQUE_ORIGINS or issubclass(tp, (types.FunctionType, types.ModuleType)):
            return None

        if is_object_shape(tp):
            return self._typed_dict(tp, name)
        return f"dict[str, {self._any()}]"

    # -- builders ----------------------------------------------------------

    def _any(self) -> str:
        self._typing.add("Any")
        return "Any"

    def _union(self, args: tuple[Any, ...]) -> str | None:
        members: list[str] = []
        for arg in args:
            expr = self._project(arg)
            if expr is not None and expr not in members:
                members.append(expr)
        if not members:
            return None
        return " | ".join(members)

    def _tuple(self, args: tuple[Any, ...]) -> str:
        if not args or args == ((),):
            return "tuple[()]"
        if len(args) == 2 and args[1] is Ellipsis:
            item = self._project(args[0])
            return f"list[{item or 'None'}]"
        items = [self._project(arg) or "None" for arg in args]
        return f"tuple[{', '.join(items)}]"

    def _enum(self, tp: type[enum.Enum]) -> str:
        values = [member.value for member in tp]
        if values and all(isinstance(v, (str, int, bool)) for v in values):
            self._typing.add("Literal")
            return f"Literal[{', '.join(repr(v) for v in values)}]"
        return self._any()

    def _typed_dict(self, tp: type, name: str | None) -> str:
        existing = self._names.get(tp)
        if existing is not None:
            return existing

        shape_name = self._unique_name(name or f"{self._prefix}{tp.__name__}")
        self._names[tp] = shape_name
        # Reserve the slot first so recursive references resolve to the name
        self._declarations[shape_name] = None

        fields: list[ShapeField] = []
        for field_name, hint, required in _class_fields(tp):
            expr = self._project(unwrap_classvar(hint))
            if expr is None:
                continue
            fields.append(ShapeField(name=field_name, type=expr, required=required))

        self._declarations[shape_name] = TypedDictShape(name=shape_name, fields=tuple(fields))
        return shape_name

    def _unique_name(self, base: str) -> str:
        candidate = base
        counter = 2
        while candidate in self._declarations:
            candidate = f"{base}{counter}"
            counter += 1
        return candidate


def project_shapes(type_name: str, input_type: Any | None, output_type: Any) -> ShapeSet:
    """Project a controller's input and output annotations for route *type_name*.

    The top-level ``TypedDict``s are named ``<type_name>Input`` and
    ``<type_name>Output``.  The input's ``params`` member, when present,
    becomes the route's path-parameter type.
    """
    projector = ShapeProjector(type_name)
    input_expr = (
        projector.project(input_type, name=f"{type_name}Input")
        if input_type is not None
        else None
    )
    output_expr = projector.project_object(
        unwrap_awaitable(output_type), name=f"{type_name}Output"
    )
    return ShapeSet(
        input=input_expr,
        output=output_expr,
        params=projector.member_type(input_expr, "params"),
        declarations=projector.declarations(),
        typing_names=projector.typing_names(),
    )
