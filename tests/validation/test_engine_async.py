"""Tests for the asynchronous validation engine."""

from __future__ import annotations

import asyncio
from typing import Annotated, Any

import pytest

from decval import Model, rule, validate_async
from decval.validation.registry import Validation, ValidatorDefinition
from decval.validation.validators import AsyncValidator
from tests.models import Address, Shelf, Team, User


class _Remote(AsyncValidator):
    async def has_errors(self, value: Any, options: Any = None, context: Any = None) -> str | None:
        await asyncio.sleep(options.get("delay", 0))
        return "taken" if value == "taken" else None


class _Exploding(AsyncValidator):
    async def has_errors(self, value: Any, options: Any = None, context: Any = None) -> str | None:
        raise RuntimeError("service unavailable")


class Handle(Model):
    name: Annotated[str, rule("remote")] = ""


class Slow(Model):
    first: Annotated[str, rule("remote", delay=0.02)] = ""
    second: Annotated[str, rule("remote")] = ""


class Fragile(Model):
    code: Annotated[str, rule("exploding")] = ""


@pytest.fixture(autouse=True)
def _async_validators() -> None:
    Validation.register(ValidatorDefinition("remote", _Remote), ValidatorDefinition("exploding", _Exploding))


class TestValidateAsync:
    @pytest.mark.asyncio
    async def test_valid_user(self, user: User) -> None:
        assert await user.has_errors_async() is None

    @pytest.mark.asyncio
    async def test_matches_sync_for_sync_rules(self) -> None:
        invalid = User({"name": "Al", "email": "bad", "address": {"street": "", "city": "X"}})
        assert await invalid.has_errors_async() == invalid.has_errors()

    @pytest.mark.asyncio
    async def test_async_rule_runs(self) -> None:
        errors = await Handle({"name": "taken"}).has_errors_async()
        assert errors is not None
        assert errors["name"] == {"remote": "taken"}
        assert await Handle({"name": "free"}).has_errors_async() is None

    @pytest.mark.asyncio
    async def test_wrong_element_type_per_element(self, user: User, address: Address) -> None:
        team = Team({"title": "Core", "members": [user, address]})
        errors = await team.has_errors_async()
        assert errors is not None
        assert errors.to_dict() == {"members": [None, {"list": "Value is not an instance of expected type(s) User"}]}
        assert errors == team.has_errors()

    def test_async_rule_skipped_by_sync_entry_point(self) -> None:
        assert Handle({"name": "taken"}).has_errors() is None

    @pytest.mark.asyncio
    async def test_declaration_order_kept(self) -> None:
        errors = await validate_async(Slow({"first": "taken", "second": "taken"}))
        assert errors is not None
        assert list(errors) == ["first", "second"]

    @pytest.mark.asyncio
    async def test_exception_becomes_message(self) -> None:
        errors = await Fragile({"code": "x"}).has_errors_async()
        assert errors is not None
        assert errors["code"] == {"exploding": "service unavailable"}

    @pytest.mark.asyncio
    async def test_nested_paths_flattened(self) -> None:
        errors = await Shelf({"stock": 1, "item": {"qty": 2}}).has_errors_async()
        assert errors is not None
        assert list(errors) == ["item.qty"]

    @pytest.mark.asyncio
    async def test_concurrent_runs_share_nested_instance(self) -> None:
        shelf = Shelf({"stock": 1, "item": {"qty": 2}})
        results = await asyncio.gather(*(shelf.has_errors_async() for _ in range(5)))
        assert all(result == results[0] for result in results)
        assert vars(shelf.item).keys() == {"qty"}
