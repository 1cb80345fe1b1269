"""Tests for null-safe payload access."""

import pytest

from audit.payload import (
    decode_state,
    extract_states,
    first_identifier,
    first_text,
    get_flag,
    get_identifier,
    get_text,
    get_value,
    is_identifier,
)
from tests.factories import new_id


class TestDecodeState:
    def test_dict_is_copied(self):
        state = {"a": 1}
        decoded = decode_state(state)
        assert decoded == state
        assert decoded is not state

    def test_json_string(self):
        assert decode_state('{"title": "Fix printer"}') == {"title": "Fix printer"}

    @pytest.mark.parametrize("value", [None, "", "not json", "[1, 2]", '"text"', 12, ["a"]])
    def test_everything_else_is_empty(self, value):
        assert decode_state(value) == {}


class TestExtractStates:
    def test_plain_columns(self):
        assert extract_states({"a": 1}, '{"b": 2}', None) == ({"a": 1}, {"b": 2})

    def test_metadata_wrapper_wins(self):
        metadata = {"old_values": {"name": "old"}, "new_values": {"name": "new"}}
        before, after = extract_states({"name": "column"}, {"name": "column"}, metadata)
        assert before == {"name": "old"}
        assert after == {"name": "new"}

    def test_metadata_without_states_falls_back(self):
        before, after = extract_states(None, {"x": 1}, {"source": "trigger"})
        assert before == {}
        assert after == {"x": 1}

    def test_metadata_as_json_string(self):
        before, after = extract_states(None, None, '{"new_values": "{\\"k\\": \\"v\\"}"}')
        assert before == {}
        assert after == {"k": "v"}


class TestAccessors:
    def test_nested_values_are_ignored(self):
        bag = {"nested": {"a": 1}, "list": [1], "n": 3}
        assert get_value(bag, "nested") is None
        assert get_value(bag, "list") is None
        assert get_value(bag, "n") == 3
        assert get_value(None, "n") is None

    def test_get_text(self):
        bag = {"a": "  hello ", "b": "", "c": "null", "d": "-", "e": 7, "f": True}
        assert get_text(bag, "a") == "hello"
        assert get_text(bag, "b") is None
        assert get_text(bag, "c") is None
        assert get_text(bag, "d") is None
        assert get_text(bag, "e") == "7"
        assert get_text(bag, "f") is None
        assert get_text(bag, "missing") is None

    def test_first_text(self):
        assert first_text(({}, "a"), ({"a": ""}, "a"), ({"a": "x"}, "a")) == "x"
        assert first_text(({}, "a")) is None

    def test_identifier_shape(self):
        assert is_identifier(new_id())
        assert not is_identifier("Engineering")
        assert not is_identifier(None)
        assert not is_identifier(12345)

    def test_get_identifier(self):
        user_id = new_id()
        assert get_identifier({"assigned_to": user_id}, "assigned_to") == user_id
        assert get_identifier({"assigned_to": "Jane"}, "assigned_to") is None

    def test_first_identifier(self):
        user_id = new_id()
        assert first_identifier(({"a": "short"}, "a"), ({"b": user_id}, "b")) == user_id

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), (False, False), ("true", True), ("Yes", True), ("0", False), (None, False), (1, True)],
    )
    def test_get_flag(self, value, expected):
        assert get_flag({"is_anonymous": value}, "is_anonymous") is expected
