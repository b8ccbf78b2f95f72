"""Tests for skema.runtime — interpolation, registration, type tags."""

import pytest

import skema
from skema.errors import MissingParameterError
from skema.runtime import Controller, RouteDescriptor, RouteIO, interpolate, placeholders, register


class TestInterpolate:
    def test_substitutes(self) -> None:
        assert interpolate("/users/{{ id }}", {"id": 42}) == "/users/42"

    def test_multiple(self) -> None:
        template = "/users/{{ id }}/posts/{{ postId }}"
        assert interpolate(template, {"id": 1, "postId": "abc"}) == "/users/1/posts/abc"

    def test_whitespace_insensitive(self) -> None:
        assert interpolate("/a/{{id}}/b/{{  slug  }}", {"id": 1, "slug": "x"}) == "/a/1/b/x"

    def test_no_placeholders(self) -> None:
        assert interpolate("/health") == "/health"
        assert interpolate("/") == "/"

    def test_extra_params_ignored(self) -> None:
        assert interpolate("/users/{{ id }}", {"id": 1, "page": 2}) == "/users/1"

    def test_missing_param(self) -> None:
        with pytest.raises(MissingParameterError) as exc_info:
            interpolate("/users/{{ id }}", {})
        assert exc_info.value.name == "id"
        assert exc_info.value.template == "/users/{{ id }}"
        assert "Missing path parameter 'id'" in str(exc_info.value)

    def test_missing_param_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            interpolate("/users/{{ id }}")

    def test_placeholders(self) -> None:
        assert placeholders("/users/{{ id }}/posts/{{ postId }}") == ["id", "postId"]
        assert placeholders("/") == []


class TestRegister:
    def test_descriptor(self) -> None:
        UsersShowRoute = RouteIO[dict, dict, None]
        descriptor = register(UsersShowRoute, path="/users/{{ id }}", method="GET", form=False)

        assert isinstance(descriptor, RouteDescriptor)
        assert descriptor.template == "/users/{{ id }}"
        assert descriptor.method == "GET"
        assert descriptor.form is False
        assert descriptor.io is UsersShowRoute

    def test_path(self) -> None:
        descriptor = register(
            RouteIO[None, None, dict[str, int]], path="/users/{{ id }}", method="GET", form=False
        )
        assert descriptor.path({"id": 7}) == "/users/7"

    def test_path_without_params(self) -> None:
        descriptor = register(RouteIO[None, None, None], path="/", method="GET", form=True)
        assert descriptor.path() == "/"
        assert descriptor.form is True

    def test_frozen(self) -> None:
        descriptor = register(RouteIO[None, None, None], path="/", method="GET", form=False)
        with pytest.raises(AttributeError):
            descriptor.method = "POST"  # type: ignore[misc]


class TestTypes:
    def test_route_io_not_instantiable(self) -> None:
        with pytest.raises(TypeError, match="type tag"):
            RouteIO()

    def test_route_io_subscriptable(self) -> None:
        alias = RouteIO[int, str, dict]
        assert alias.__origin__ is RouteIO

    def test_controller_protocol(self) -> None:
        class ShowController:
            def handle(self, request: object) -> dict:
                return {}

        class NotAController:
            pass

        assert isinstance(ShowController(), Controller)
        assert not isinstance(NotAController(), Controller)


class TestLazyExports:
    def test_runtime_names(self) -> None:
        assert skema.register is register
        assert skema.RouteIO is RouteIO

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError):
            skema.does_not_exist  # noqa: B018
