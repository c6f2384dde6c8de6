"""Tests for the unified input event type and keyboard mapping."""

import pytest

from input_events import EventKind, InputEvent, event_from_key, key_from_tk


class TestEventFromKey:

    @pytest.mark.parametrize("key", list("0123456789"))
    def test_digits(self, key):
        assert event_from_key(key) == InputEvent(EventKind.DIGIT, key)

    @pytest.mark.parametrize(
        "key,glyph",
        [("+", "+"), ("-", "−"), ("*", "×"), ("/", "÷")],
    )
    def test_operators_map_to_display_glyphs(self, key, glyph):
        assert event_from_key(key) == InputEvent(EventKind.OPERATOR, glyph)

    def test_decimal(self):
        assert event_from_key(".") == InputEvent(EventKind.DECIMAL)

    @pytest.mark.parametrize("key", ["(", ")"])
    def test_parentheses(self, key):
        assert event_from_key(key) == InputEvent(EventKind.PARENTHESIS, key)

    @pytest.mark.parametrize("key", ["Enter", "="])
    def test_equals(self, key):
        assert event_from_key(key) == InputEvent(EventKind.EQUALS)

    def test_backspace(self):
        assert event_from_key("Backspace") == InputEvent(EventKind.BACKSPACE)

    @pytest.mark.parametrize("key", ["Escape", "c", "C"])
    def test_clear(self, key):
        assert event_from_key(key) == InputEvent(EventKind.CLEAR)

    @pytest.mark.parametrize("key", ["x", "Shift_L", "", "²", "Tab", "^"])
    def test_unhandled_keys(self, key):
        assert event_from_key(key) is None


class TestKeyFromTk:

    @pytest.mark.parametrize(
        "keysym,char,expected",
        [
            ("Return", "\r", "Enter"),
            ("KP_Enter", "\r", "Enter"),
            ("BackSpace", "\x08", "Backspace"),
            ("Escape", "\x1b", "Escape"),
            ("plus", "+", "+"),
            ("7", "7", "7"),
            ("Shift_L", "", ""),
        ],
    )
    def test_translation(self, keysym, char, expected):
        assert key_from_tk(keysym, char) == expected


class TestInputEventValidation:

    def test_unknown_digit(self):
        with pytest.raises(ValueError):
            InputEvent(EventKind.DIGIT, "x")

    def test_ascii_operator_rejected(self):
        with pytest.raises(ValueError):
            InputEvent(EventKind.OPERATOR, "-")

    def test_unknown_function(self):
        with pytest.raises(ValueError):
            InputEvent(EventKind.FUNCTION, "exp")

    def test_unknown_memory_key(self):
        with pytest.raises(ValueError):
            InputEvent(EventKind.MEMORY, "MS")

    def test_events_are_hashable(self):
        assert len({InputEvent(EventKind.CLEAR), InputEvent(EventKind.CLEAR)}) == 1
