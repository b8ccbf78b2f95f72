"""Tests for skema.generator.shapes — annotation to client type projection."""

import datetime
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Annotated, Any, NamedTuple, NotRequired, TypedDict

from skema.generator.shapes import (
    ShapeField,
    ShapeProjector,
    TypedDictShape,
    is_object_shape,
    project_shapes,
)


@dataclass
class Address:
    street: str
    zip_code: str | None


@dataclass
class User:
    id: int
    name: str
    created: datetime.datetime
    address: Address
    tags: set[str]
    callback: Callable[[], None]


class Role(Enum):
    ADMIN = "admin"
    MEMBER = "member"


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Point(NamedTuple):
    x: int
    y: float


class Query(TypedDict, total=False):
    page: int
    q: str


class Params(TypedDict):
    id: int
    draft: NotRequired[bool]


FromTo = TypedDict("FromTo", {"from": str, "to": str})


@dataclass
class Node:
    value: int
    children: list["Node"]


class Money:
    def to_json(self) -> str:
        return "1.00 EUR"


class Profile:
    name: str
    age: int


def _project(annotation: Any) -> tuple[str | None, ShapeProjector]:
    projector = ShapeProjector("TestRoute")
    return projector.project(annotation), projector


class TestPrimitives:
    def test_scalars(self) -> None:
        assert _project(str)[0] == "str"
        assert _project(int)[0] == "int"
        assert _project(float)[0] == "float"
        assert _project(bool)[0] == "bool"
        assert _project(None)[0] == "None"

    def test_any(self) -> None:
        expr, projector = _project(Any)
        assert expr == "Any"
        assert "Any" in projector.typing_names()

    def test_string_like(self) -> None:
        assert _project(datetime.datetime)[0] == "str"
        assert _project(datetime.date)[0] == "str"
        assert _project(uuid.UUID)[0] == "str"
        assert _project(bytes)[0] == "str"

    def test_annotated_unwrapped(self) -> None:
        assert _project(Annotated[int, "meta"])[0] == "int"

    def test_union(self) -> None:
        assert _project(int | None)[0] == "int | None"
        assert _project(int | str)[0] == "int | str"


class TestEnums:
    def test_string_enum(self) -> None:
        expr, projector = _project(Role)
        assert expr == "Literal['admin', 'member']"
        assert "Literal" in projector.typing_names()

    def test_int_enum(self) -> None:
        assert _project(Priority)[0] == "Literal[1, 2]"


class TestCollections:
    def test_list(self) -> None:
        assert _project(list[int])[0] == "list[int]"

    def test_set_becomes_list(self) -> None:
        assert _project(set[str])[0] == "list[str]"
        assert _project(frozenset[int])[0] == "list[int]"

    def test_fixed_tuple(self) -> None:
        assert _project(tuple[int, str])[0] == "tuple[int, str]"

    def test_variadic_tuple(self) -> None:
        assert _project(tuple[int, ...])[0] == "list[int]"

    def test_empty_tuple(self) -> None:
        assert _project(tuple[()])[0] == "tuple[()]"

    def test_callables_become_none_in_sequences(self) -> None:
        assert _project(list[Callable[[], None]])[0] == "list[None]"
        assert _project(tuple[int, Callable[[], None]])[0] == "tuple[int, None]"

    def test_mapping(self) -> None:
        assert _project(dict[str, int])[0] == "dict[str, int]"
        assert _project(Mapping[str, Any])[0] == "dict[str, Any]"

    def test_namedtuple(self) -> None:
        assert _project(Point)[0] == "tuple[int, float]"

    def test_callable_dropped(self) -> None:
        assert _project(Callable[[int], int])[0] is None


class TestObjects:
    def test_dataclass(self) -> None:
        expr, projector = _project(User)
        assert expr == "TestRouteUser"

        user, address = projector.declarations()
        assert user.name == "TestRouteUser"
        assert [(f.name, f.type) for f in user.fields] == [
            ("id", "int"),
            ("name", "str"),
            ("created", "str"),
            ("address", "TestRouteAddress"),
            ("tags", "list[str]"),
        ]
        assert address.fields == (
            ShapeField("street", "str"),
            ShapeField("zip_code", "str | None"),
        )

    def test_typeddict_optional_keys(self) -> None:
        expr, projector = _project(Query)
        (decl,) = projector.declarations()
        assert expr == "TestRouteQuery"
        assert all(not f.required for f in decl.fields)
        assert "NotRequired" in projector.typing_names()
        assert "TypedDict" in projector.typing_names()

    def test_typeddict_mixed_keys(self) -> None:
        _, projector = _project(Params)
        (decl,) = projector.declarations()
        assert decl.fields == (
            ShapeField("id", "int"),
            ShapeField("draft", "bool", required=False),
        )

    def test_annotated_class(self) -> None:
        expr, projector = _project(Profile)
        assert expr == "TestRouteProfile"
        assert [f.name for f in projector.declarations()[0].fields] == ["name", "age"]

    def test_recursive(self) -> None:
        expr, projector = _project(Node)
        (decl,) = projector.declarations()
        assert decl.fields[1] == ShapeField("children", f"list[{expr}]")

    def test_to_json(self) -> None:
        assert _project(Money)[0] == "str"

    def test_same_class_declared_once(self) -> None:
        expr, projector = _project(tuple[Address, Address])
        assert expr == "tuple[TestRouteAddress, TestRouteAddress]"
        assert len(projector.declarations()) == 1

    def test_is_object_shape(self) -> None:
        assert is_object_shape(User)
        assert is_object_shape(Query)
        assert is_object_shape(dict[str, int])
        assert not is_object_shape(str)
        assert not is_object_shape(list[int])
        assert not is_object_shape(Role)


class TestRender:
    def test_class_syntax(self) -> None:
        shape = TypedDictShape(
            name="UsersShowRouteOutput",
            fields=(ShapeField("id", "int"), ShapeField("page", "int", required=False)),
        )
        assert shape.render() == (
            "class UsersShowRouteOutput(TypedDict):\n"
            "    id: int\n"
            "    page: NotRequired[int]\n"
        )

    def test_empty(self) -> None:
        shape = TypedDictShape(name="Empty", fields=())
        assert shape.render() == "class Empty(TypedDict):\n    pass\n"

    def test_functional_syntax_for_keywords(self) -> None:
        _, projector = _project(FromTo)
        (decl,) = projector.declarations()
        assert decl.functional
        assert decl.render() == (
            "TestRouteFromTo = TypedDict('TestRouteFromTo', {'from': 'str', 'to': 'str'})\n"
        )


class TestProjectShapes:
    def test_named_input_and_output(self) -> None:
        shapes = project_shapes("UsersShowRoute", Params, Address)

        assert shapes.input == "UsersShowRouteInput"
        assert shapes.output == "UsersShowRouteOutput"
        assert [d.name for d in shapes.declarations] == ["UsersShowRouteInput", "UsersShowRouteOutput"]
        assert shapes.io_alias("UsersShowRoute") == (
            "UsersShowRoute = RouteIO[UsersShowRouteInput, UsersShowRouteOutput, None]\n"
        )

    def test_no_input(self) -> None:
        shapes = project_shapes("HomeRoute", None, dict[str, int])
        assert shapes.input is None
        assert shapes.output == "dict[str, int]"
        assert shapes.io_alias("HomeRoute") == "HomeRoute = RouteIO[None, dict[str, int], None]\n"

    def test_scalar_output_has_no_shape(self) -> None:
        shapes = project_shapes("HealthRoute", None, str)
        assert shapes.output is None
        assert shapes.declarations == ()

    def test_optional_object_output_rolled_back(self) -> None:
        shapes = project_shapes("MaybeRoute", None, Address | None)
        assert shapes.output is None
        assert shapes.declarations == ()

    def test_list_output(self) -> None:
        shapes = project_shapes("UsersListRoute", None, list[Address])
        assert shapes.output == "list[UsersListRouteAddress]"
        assert [d.name for d in shapes.declarations] == ["UsersListRouteAddress"]

    def test_awaitable_output_unwrapped(self) -> None:
        from collections.abc import Awaitable

        shapes = project_shapes("AsyncRoute", None, Awaitable[Address])
        assert shapes.output == "AsyncRouteOutput"

    def test_unannotated_output_stays_any(self) -> None:
        shapes = project_shapes("EchoRoute", None, Any)
        assert shapes.output == "Any"
        assert "Any" in shapes.typing_names
        assert shapes.io_alias("EchoRoute") == "EchoRoute = RouteIO[None, Any, None]\n"


@dataclass
class ShowInput:
    params: Params
    query: Query


class TestParamsShape:
    def test_params_member_becomes_third_argument(self) -> None:
        shapes = project_shapes("UsersShowRoute", ShowInput, Address)

        assert shapes.params == "UsersShowRouteParams"
        assert "UsersShowRouteParams" in [d.name for d in shapes.declarations]
        assert shapes.io_alias("UsersShowRoute") == (
            "UsersShowRoute = RouteIO[UsersShowRouteInput, UsersShowRouteOutput, UsersShowRouteParams]\n"
        )

    def test_input_without_params(self) -> None:
        assert project_shapes("SearchRoute", Query, None).params is None

    def test_no_input_no_params(self) -> None:
        assert project_shapes("HomeRoute", None, Address).params is None

    def test_mapping_input_has_no_params(self) -> None:
        assert project_shapes("RawRoute", dict[str, int], None).params is None
