"""Tests for nested rebuilding during construction."""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from decval.model.construction import from_model, from_object
from tests.models import Address, Booking, Event, Team, User


class TestFromObject:
    def test_shallow_copy(self) -> None:
        target = Address()
        from_object(target, {"street": "a", "city": "b", "zip": "1"})
        assert vars(target) == {"street": "a", "city": "b"}

    def test_none_source(self) -> None:
        target = Address({"street": "a"})
        from_object(target, None)
        assert target.street == "a"

    def test_no_nested_rebuild(self) -> None:
        target = User()
        from_object(target, {"address": {"street": "a"}})
        assert target.address == {"street": "a"}


class TestFromModel:
    def test_nested_model(self) -> None:
        target = from_model(User(), {"address": {"street": "a", "city": "b"}})
        assert isinstance(target.address, Address)

    def test_list_of_models(self) -> None:
        team = Team({"members": [{"name": "Alice"}, {"__model": "User", "name": "Bob"}]})
        assert [type(member) for member in team.members] == [User, User]
        assert [member.name for member in team.members] == ["Alice", "Bob"]

    def test_collection_type_restored(self) -> None:
        team = Team({"tags": ["a", "b", "a"]})
        assert team.tags == {"a", "b"}

    def test_iso_datetime_parsed(self) -> None:
        booking = Booking({"created": "2024-01-31T10:00:00"})
        assert booking.created == datetime(2024, 1, 31, 10, 0)

    def test_date_rule_format(self) -> None:
        booking = Booking({"event": {"name": "E", "starts": "01/02/2024"}})
        assert isinstance(booking.event, Event)
        assert booking.event.starts == datetime(2024, 2, 1)

    def test_unparsable_date_kept(self) -> None:
        event = Event({"name": "E", "starts": "someday"})
        assert event.starts == "someday"
        errors = event.has_errors()
        assert errors is not None
        assert errors["starts"] == {"date": "Invalid value. not a valid Date"}

    def test_iso_string_rejected_under_other_format(self) -> None:
        event = Event({"name": "E", "starts": "2024-01-31"})
        assert event.starts == "2024-01-31"
        errors = event.has_errors()
        assert errors is not None
        assert errors["starts"] == {"date": "Invalid value. not a valid Date"}

    def test_unknown_anchor_kept_as_raw_data(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="decval.model.construction"):
            user = User({"name": "Alice", "address": {"__model": "Nope", "street": "a"}})
        assert user.address == {"__model": "Nope", "street": "a"}
        assert "Could not rebuild User.address" in caplog.text
