"""Tests for skema.routing.paths — pattern validation, templates, methods."""

import pytest

from skema.errors import PathShapeError
from skema.routing.paths import normalize_pattern, parse_path, resolve_method, to_template
from skema.routing.route import PathSegment


class TestParsePath:
    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_static_and_param(self) -> None:
        assert parse_path("/users/:id") == [
            PathSegment(value="users"),
            PathSegment(value=":id", is_param=True, param_name="id"),
        ]

    def test_static_allows_digits_and_hyphens(self) -> None:
        segments = parse_path("/api/v1/user-profiles")
        assert [s.value for s in segments] == ["api", "v1", "user-profiles"]

    def test_static_is_case_insensitive(self) -> None:
        assert parse_path("/Users")[0].value == "Users"

    def test_param_with_underscore_rejected(self) -> None:
        with pytest.raises(PathShapeError, match="Only letters are allowed") as exc_info:
            parse_path("/users/:user_id")
        assert exc_info.value.pattern == "/users/:user_id"
        assert exc_info.value.segment == 1

    def test_param_with_digit_rejected(self) -> None:
        with pytest.raises(PathShapeError):
            parse_path("/items/:id2")

    def test_static_with_underscore_rejected(self) -> None:
        with pytest.raises(PathShapeError, match="static segments") as exc_info:
            parse_path("/user_profiles")
        assert exc_info.value.segment == 0

    def test_static_with_dot_rejected(self) -> None:
        with pytest.raises(PathShapeError):
            parse_path("/files/report.pdf")

    def test_message_names_route_and_segment(self) -> None:
        with pytest.raises(PathShapeError) as exc_info:
            parse_path("/a/b/:x_y")
        assert "'/a/b/:x_y'" in str(exc_info.value)
        assert "segment 2" in str(exc_info.value)


class TestToTemplate:
    def test_root(self) -> None:
        assert to_template("/") == "/"

    def test_static_only(self) -> None:
        assert to_template("/users") == "/users"

    def test_params_become_placeholders(self) -> None:
        assert to_template("/users/:id/posts/:postId") == "/users/{{ id }}/posts/{{ postId }}"

    def test_validates(self) -> None:
        with pytest.raises(PathShapeError):
            to_template("/users/:user_id")


class TestNormalizePattern:
    def test_brace_params(self) -> None:
        assert normalize_pattern("/users/{id}") == "/users/:id"

    def test_typed_brace_params(self) -> None:
        assert normalize_pattern("/users/{id:int}/posts/{slug}") == "/users/:id/posts/:slug"

    def test_colon_params_unchanged(self) -> None:
        assert normalize_pattern("/users/:id") == "/users/:id"


class TestResolveMethod:
    def test_default_get(self) -> None:
        assert resolve_method([]) == "GET"

    def test_head_ignored(self) -> None:
        assert resolve_method(["GET", "HEAD"]) == "GET"
        assert resolve_method(["HEAD"]) == "GET"

    def test_post_with_head(self) -> None:
        assert resolve_method(["POST", "HEAD"]) == "POST"

    def test_last_non_head_wins(self) -> None:
        assert resolve_method(["GET", "POST"]) == "POST"
        assert resolve_method(["PUT", "HEAD", "DELETE"]) == "DELETE"

    def test_uppercases(self) -> None:
        assert resolve_method(["patch"]) == "PATCH"
