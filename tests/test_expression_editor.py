"""Tests for the expression editor state transitions."""

import pytest

from calculator_engine import CalculatorEngine, build_provider
from calculator_state import CalculatorState
from expression_editor import ExpressionEditor, transition
from input_events import EventKind, InputEvent, event_from_key

CLEAR = InputEvent(EventKind.CLEAR)
BACKSPACE = InputEvent(EventKind.BACKSPACE)
DECIMAL = InputEvent(EventKind.DECIMAL)
EQUALS = InputEvent(EventKind.EQUALS)


def digit(d):
    return InputEvent(EventKind.DIGIT, d)


def op(o):
    return InputEvent(EventKind.OPERATOR, o)


def func(f):
    return InputEvent(EventKind.FUNCTION, f)


def paren(p):
    return InputEvent(EventKind.PARENTHESIS, p)


def mem(m):
    return InputEvent(EventKind.MEMORY, m)


def press(editor, *events):
    for event in events:
        editor.dispatch(event)
    return editor.state


def type_number(editor, text):
    return press(editor, *[DECIMAL if c == "." else digit(c) for c in text])


class TestInitialState:

    def test_defaults(self, editor):
        state = editor.state
        assert state.expression == ""
        assert state.result == "0"
        assert state.memory == 0
        assert not state.has_error

    def test_has_error_follows_result(self):
        assert CalculatorState(result="Error").has_error
        assert not CalculatorState(result="12").has_error


class TestDigitsAndOperators:

    def test_expression_is_evaluated_on_every_input(self, editor):
        state = press(editor, digit("2"), op("+"), digit("3"), op("×"), digit("4"))
        assert state.expression == "2+3×4"
        assert state.result == "14"

    def test_operator_replaces_previous_operator(self, editor):
        state = press(editor, digit("5"), op("+"), op("×"))
        assert state.expression == "5×"

    @pytest.mark.parametrize("first,second", [("−", "+"), ("÷", "−"), ("×", "÷")])
    def test_operator_collision_any_pair(self, editor, first, second):
        state = press(editor, digit("8"), op(first), op(second))
        assert state.expression == "8" + second

    def test_operator_after_parenthesis_appends(self, editor):
        state = press(editor, paren("("), digit("1"), paren(")"), op("+"))
        assert state.expression == "(1)+"

    def test_incomplete_expression_shows_error(self, editor):
        state = press(editor, digit("5"), op("+"))
        assert state.has_error


class TestDecimalPoint:

    def test_second_point_in_segment_is_rejected(self, editor):
        type_number(editor, "3.")
        before = editor.state
        after = editor.dispatch(DECIMAL)
        assert after.expression == "3."
        assert after == before

    def test_point_allowed_in_new_segment(self, editor):
        type_number(editor, "3.5")
        press(editor, op("+"), digit("2"), DECIMAL, digit("5"))
        assert editor.state.expression == "3.5+2.5"
        assert editor.state.result == "6"

    def test_point_on_empty_expression(self, editor):
        state = press(editor, DECIMAL, digit("5"))
        assert state.expression == ".5"
        assert state.result == "0.5"


class TestFunctions:

    def test_function_opens_parenthesis(self, editor):
        state = press(editor, func("sin"))
        assert state.expression == "sin("
        assert state.has_error

    def test_function_completed(self, editor):
        state = press(editor, func("sin"), digit("0"), paren(")"))
        assert state.expression == "sin(0)"
        assert state.result == "0"

    @pytest.mark.parametrize("name", ["cos", "tan", "ln", "log", "√"])
    def test_other_functions_open_parenthesis(self, editor, name):
        assert press(editor, func(name)).expression == name + "("

    def test_square(self, editor):
        state = press(editor, digit("3"), func("x²"))
        assert state.expression == "3^2"
        assert state.result == "9"

    def test_power(self, editor):
        state = press(editor, digit("2"), func("x^y"), digit("3"))
        assert state.expression == "2^3"
        assert state.result == "8"

    def test_constants_are_appended_as_glyphs(self, editor):
        state = press(editor, func("π"))
        assert state.expression == "π"
        assert state.result == "3.141592654"

    def test_power_tower_typed_key_by_key(self, editor):
        for _ in range(3):
            press(editor, digit("9"), func("x^y"))
        state = press(editor, digit("9"), EQUALS)
        assert state.expression == "9^9^9^9"
        assert state.has_error

    def test_ln_of_e(self, editor):
        state = press(editor, func("ln"), func("e"), paren(")"))
        assert state.expression == "ln(e)"
        assert state.result == "1"


class TestBackspaceAndClear:

    def test_backspace_removes_last_character(self, editor):
        state = press(editor, digit("1"), digit("2"), BACKSPACE)
        assert state.expression == "1"
        assert state.result == "1"

    def test_backspace_on_empty(self, editor):
        state = press(editor, BACKSPACE)
        assert state.expression == ""
        assert state.result == "0"

    def test_clear_keeps_memory(self, editor):
        press(editor, digit("7"), mem("M+"), op("+"), digit("1"))
        state = press(editor, CLEAR)
        assert state.expression == ""
        assert state.result == "0"
        assert not state.has_error
        assert state.memory == 7

    def test_clear_resets_error(self, editor):
        press(editor, digit("5"), op("÷"), digit("0"))
        state = press(editor, CLEAR)
        assert not state.has_error


class TestEquals:

    def test_equals_replaces_expression_with_result(self, editor):
        state = press(editor, digit("2"), op("+"), digit("3"), EQUALS)
        assert state.expression == "5"
        assert state.result == "5"

    def test_continue_from_result(self, editor):
        press(editor, digit("2"), op("+"), digit("3"), EQUALS)
        state = press(editor, op("×"), digit("2"))
        assert state.expression == "5×2"
        assert state.result == "10"

    def test_division_by_zero(self, editor):
        state = press(editor, digit("5"), op("÷"), digit("0"))
        assert state.result == "Error"
        assert state.has_error

    def test_equals_is_noop_while_error(self, editor):
        press(editor, digit("5"), op("÷"), digit("0"))
        before = editor.state
        after = editor.dispatch(EQUALS)
        assert after.expression == "5÷0"
        assert after == before

    def test_expression_editable_after_error(self, editor):
        press(editor, digit("5"), op("÷"), digit("0"))
        state = press(editor, BACKSPACE, digit("2"))
        assert state.expression == "5÷2"
        assert state.result == "2.5"
        assert not state.has_error

    def test_equals_on_empty_expression(self, editor):
        state = press(editor, EQUALS)
        assert state.expression == "0"
        state = press(editor, digit("5"))
        assert state.expression == "05"
        assert state.result == "5"

    def test_exponential_result_reenters(self, editor):
        press(editor, digit("1"), digit("0"), func("x^y"), digit("1"), digit("0"), EQUALS)
        assert editor.state.expression == "1.000000e+10"
        state = press(editor, op("×"), digit("2"))
        assert state.result == "2.000000e+10"


class TestMemory:

    def test_memory_add_and_recall(self, editor):
        press(editor, digit("8"), mem("M+"), CLEAR)
        state = press(editor, mem("MR"))
        assert state.expression == "8"
        assert state.result == "8"

    def test_memory_subtract(self, editor):
        press(editor, digit("8"), mem("M+"), CLEAR, digit("3"), mem("M-"))
        assert editor.state.memory == 5

    def test_memory_clear(self, editor):
        press(editor, digit("8"), mem("M+"), mem("MC"))
        assert editor.state.memory == 0
        assert editor.state.expression == "8"

    def test_recall_appends_to_expression(self, editor):
        press(editor, digit("4"), mem("M+"), CLEAR, digit("2"), op("×"))
        state = press(editor, mem("MR"))
        assert state.expression == "2×4"
        assert state.result == "8"

    def test_recall_fractional_memory(self, editor):
        type_number(editor, "2.5")
        press(editor, mem("M+"), CLEAR)
        assert press(editor, mem("MR")).expression == "2.5"

    def test_recall_negative_memory(self, editor):
        press(editor, digit("3"), mem("M-"), CLEAR, digit("1"), op("+"), mem("MR"))
        assert editor.state.expression == "1+-3"
        assert editor.state.result == "-2"

    def test_memory_add_ignored_on_error(self, editor):
        press(editor, digit("5"), op("÷"), digit("0"), mem("M+"))
        assert editor.state.memory == 0

    def test_memory_add_uses_exponential_result(self, editor):
        press(editor, digit("1"), digit("0"), func("x^y"), digit("1"), digit("0"), mem("M+"))
        assert editor.state.memory == 1e10

    def test_memory_text_hidden_when_zero(self, editor):
        assert editor.memory_text is None

    def test_memory_text_uses_result_format(self, editor):
        press(editor, digit("1"), op("÷"), digit("3"), mem("M+"))
        assert editor.memory_text == "0.3333333333"


class TestTransition:
    """The transition function is pure and input-modality agnostic."""

    def setup_method(self):
        self.engine = CalculatorEngine(build_provider("python"))

    def test_transition_does_not_mutate_state(self):
        state = CalculatorState(expression="1+")
        new_state = transition(state, digit("1"), self.engine)
        assert state.expression == "1+"
        assert new_state.expression == "1+1"
        assert new_state.result == "2"

    def test_keyboard_and_buttons_agree(self):
        keys = ["2", "*", "(", "3", "-", "1", ")", "/", "4", ".", ".", "Enter"]
        buttons = [
            digit("2"), op("×"), paren("("), digit("3"), op("−"), digit("1"),
            paren(")"), op("÷"), digit("4"), DECIMAL, DECIMAL, EQUALS,
        ]

        by_keyboard = CalculatorState()
        for key in keys:
            by_keyboard = transition(by_keyboard, event_from_key(key), self.engine)

        by_buttons = CalculatorState()
        for event in buttons:
            by_buttons = transition(by_buttons, event, self.engine)

        assert by_keyboard == by_buttons
        assert by_buttons.expression == "1"

    def test_refresh_after_angle_change(self):
        editor = ExpressionEditor(self.engine)
        press(editor, func("sin"), digit("9"), digit("0"), paren(")"))
        assert editor.state.result == "0.8939966636"
        self.engine.angle_mode = "deg"
        assert editor.refresh().result == "1"
        assert editor.state.expression == "sin(90)"
