"""Tests for skema.generator.ledger — controller and key uniqueness."""

import pytest

from skema.errors import CollisionError
from skema.generator.ledger import RouteLedger
from skema.routing.route import ControllerRef, ParsedRoute, RouteName


def _route(pattern: str, controller: str, key: str) -> ParsedRoute:
    return ParsedRoute(
        pattern=pattern,
        path=pattern,
        method="GET",
        form=False,
        controller=ControllerRef(path=controller, relative=f"../{controller}.py"),
        name=RouteName(key=key, type=f"{key.title()}Route"),
    )


class TestRouteLedger:
    def test_admit(self) -> None:
        ledger = RouteLedger()
        route = _route("/users", "app.users_controller", "USERS")

        ledger.check(route)
        ledger.admit(route)

        assert len(ledger) == 1
        assert "USERS" in ledger

    def test_controller_reuse(self) -> None:
        ledger = RouteLedger()
        first = _route("/users", "app.users_controller", "USERS")
        ledger.admit(first)
        second = _route("/people", "app.users_controller", "PEOPLE")

        with pytest.raises(CollisionError, match="already registered") as exc_info:
            ledger.check(second)
        assert exc_info.value.current is second
        assert exc_info.value.registered is first

    def test_key_reuse(self) -> None:
        ledger = RouteLedger()
        ledger.admit(_route("/api/users", "app.users_controller", "API_USERS"))

        with pytest.raises(CollisionError, match="'API_USERS'"):
            ledger.check(_route("/api/users/:id", "app.admin.users_controller", "API_USERS"))

    def test_controller_checked_first(self) -> None:
        ledger = RouteLedger()
        ledger.admit(_route("/users", "app.users_controller", "USERS"))

        with pytest.raises(CollisionError, match="controller"):
            ledger.check(_route("/users", "app.users_controller", "USERS"))
