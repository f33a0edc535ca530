"""Tests for the JSON and YAML serializers."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from decval import Model, Serialization, serialized_by
from decval.exceptions import ConfigurationError, SerializationError
from decval.serialization.serializers import JSONSerializer, Serializer, YamlSerializer, to_plain
from tests.models import Booking, Color, Event, Point, Team, User


@serialized_by("yaml")
class Note(Model):
    text: str = ""


class Upper(Serializer):
    def serialize(self, model: object) -> str:
        return "UPPER"

    def deserialize(self, text: str) -> object:
        return text.lower()


@pytest.fixture
def team(user: User) -> Team:
    return Team({"title": "Core", "members": [user, User({"name": "Bob"})], "tags": {"b", "a"}})


class TestToPlain:
    def test_anchor_first(self, user: User) -> None:
        assert next(iter(to_plain(user))) == "__model"

    def test_sets_become_sorted_lists(self, team: Team) -> None:
        assert to_plain(team)["tags"] == ["a", "b"]

    def test_date_rule_format(self) -> None:
        event = Event({"name": "E", "starts": datetime(2024, 2, 1)})
        assert to_plain(event)["starts"] == "01/02/2024"

    def test_plain_dates_iso(self) -> None:
        booking = Booking({"created": datetime(2024, 1, 31, 10, 0)})
        assert to_plain(booking)["created"] == "2024-01-31T10:00:00"

    def test_enum_value(self) -> None:
        event = Event({"name": "E", "color": Color.GREEN})
        assert to_plain(event)["color"] == "green"


class TestJSONSerializer:
    def test_round_trip_nested(self, user: User) -> None:
        text = user.serialize()
        assert json.loads(text)["address"]["__model"] == "Address"
        assert User.deserialize(text) == user

    def test_round_trip_collections(self, team: Team) -> None:
        rebuilt = Serialization.deserialize(team.serialize())
        assert isinstance(rebuilt, Team)
        assert rebuilt.tags == {"a", "b"}
        assert [member.name for member in rebuilt.members] == ["Alice", "Bob"]

    def test_round_trip_dates(self) -> None:
        booking = Booking(
            {"event": Event({"name": "E", "starts": "01/02/2024"}), "created": datetime(2024, 1, 31, 10, 0)}
        )
        rebuilt = Serialization.deserialize(booking.serialize())
        assert rebuilt.created == datetime(2024, 1, 31, 10, 0)
        assert rebuilt.event.starts == datetime(2024, 2, 1)

    def test_registered_name_anchor(self) -> None:
        rebuilt = Serialization.deserialize(Point({"x": 1, "y": 2}).serialize())
        assert isinstance(rebuilt, Point)
        assert (rebuilt.x, rebuilt.y) == (1, 2)

    def test_options(self, address: object) -> None:
        text = JSONSerializer(indent=2, sort_keys=True).serialize(address)
        assert text.splitlines()[1] == '  "__model": "Address",'

    def test_invalid_json(self) -> None:
        with pytest.raises(SerializationError, match="Invalid JSON payload"):
            Serialization.deserialize("{not json")

    def test_missing_anchor(self) -> None:
        with pytest.raises(SerializationError, match="anchor"):
            Serialization.deserialize('{"name": "Alice"}')

    def test_unknown_anchor(self) -> None:
        with pytest.raises(SerializationError, match="Nope"):
            Serialization.deserialize('{"__model": "Nope"}')


class TestYamlSerializer:
    def test_round_trip(self, team: Team) -> None:
        serializer = YamlSerializer()
        rebuilt = serializer.deserialize(serializer.serialize(team))
        assert rebuilt == team

    def test_block_style(self, address: object) -> None:
        text = YamlSerializer().serialize(address)
        assert "__model: Address" in text
        assert "{" not in text

    def test_serialized_by(self) -> None:
        note = Note({"text": "hello"})
        text = note.serialize()
        assert "text: hello" in text
        assert Note.deserialize(text) == note

    def test_invalid_yaml(self) -> None:
        with pytest.raises(SerializationError, match="Invalid YAML payload"):
            YamlSerializer().deserialize("key: [unclosed")


class TestSerializationRegistry:
    def test_unknown_method(self) -> None:
        with pytest.raises(ConfigurationError, match="No serialization method registered under xml"):
            Serialization.get("xml")

    def test_serialized_by_unknown_method(self) -> None:
        with pytest.raises(ConfigurationError):
            serialized_by("xml")

    def test_register_and_default(self, address: object) -> None:
        Serialization.register("upper", Upper(), default=True)
        assert Serialization.current() == "upper"
        assert Serialization.serialize(address) == "UPPER"
        assert Serialization.deserialize("ABC") == "abc"

    def test_explicit_method(self, address: object) -> None:
        assert Serialization.serialize(address, "yaml").startswith("__model: Address")

    def test_set_default_unknown(self) -> None:
        with pytest.raises(ConfigurationError):
            Serialization.set_default("xml")
