"""Editor de expresiones: transiciones del estado de la calculadora.

``transition(state, event, engine)`` es una función pura que devuelve el
nuevo estado; ``ExpressionEditor`` guarda el estado actual y lo actualiza
con cada evento. Toda transición que cambia la expresión la vuelve a
evaluar, así que ``result`` nunca queda desfasado.
"""

import re
from dataclasses import replace

import structlog

from calculator_state import CalculatorState
from input_events import OPERATORS, EventKind, InputEvent
from result_formatter import ERROR_TEXT, format_result

logger = structlog.get_logger()

_NEEDS_PARENTHESES = ("sin", "cos", "tan", "ln", "log", "√")
_FUNCTION_INSERTS = {
    "x²": "^2",
    "x^y": "^",
}
_SEGMENT_SEPARATORS = re.compile("[" + "".join(OPERATORS) + "]")


def _with_expression(state: CalculatorState, expression: str, engine) -> CalculatorState:
    return replace(state, expression=expression, result=engine.evaluate(expression))


def _append_operator(expression: str, op: str) -> str:
    if expression and expression[-1] in OPERATORS:
        return expression[:-1] + op
    return expression + op


def _append_function(expression: str, func: str) -> str:
    if func in _FUNCTION_INSERTS:
        return expression + _FUNCTION_INSERTS[func]
    if func in _NEEDS_PARENTHESES:
        return expression + func + "("
    return expression + func


def _can_append_decimal(expression: str) -> bool:
    segment = _SEGMENT_SEPARATORS.split(expression)[-1]
    return "." not in segment


def _number_literal(value: float) -> str:
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _parse_result(result: str) -> float | None:
    try:
        return float(result)
    except ValueError:
        return None


def _memory(state: CalculatorState, key: str, engine) -> CalculatorState:
    if key == "MC":
        return replace(state, memory=0.0)
    if key == "MR":
        return _with_expression(
            state, state.expression + _number_literal(state.memory), engine
        )

    current = _parse_result(state.result)
    if current is None:
        return state
    if key == "M+":
        return replace(state, memory=state.memory + current)
    return replace(state, memory=state.memory - current)


def _equals(state: CalculatorState, engine) -> CalculatorState:
    if state.has_error:
        return state
    result = engine.evaluate(state.expression)
    if result == ERROR_TEXT:
        return replace(state, result=result)
    return replace(state, expression=result, result=result)


def transition(state: CalculatorState, event: InputEvent, engine) -> CalculatorState:
    """Aplica ``event`` sobre ``state`` y devuelve el estado resultante."""
    expression = state.expression
    kind = event.kind

    if kind is EventKind.DIGIT or kind is EventKind.PARENTHESIS:
        return _with_expression(state, expression + event.value, engine)
    if kind is EventKind.OPERATOR:
        return _with_expression(state, _append_operator(expression, event.value), engine)
    if kind is EventKind.FUNCTION:
        return _with_expression(state, _append_function(expression, event.value), engine)
    if kind is EventKind.DECIMAL:
        if not _can_append_decimal(expression):
            return state
        return _with_expression(state, expression + ".", engine)
    if kind is EventKind.BACKSPACE:
        return _with_expression(state, expression[:-1], engine)
    if kind is EventKind.CLEAR:
        return replace(state, expression="", result="0")
    if kind is EventKind.EQUALS:
        return _equals(state, engine)
    if kind is EventKind.MEMORY:
        return _memory(state, event.value, engine)
    raise ValueError(f"Evento no soportado: {event!r}")


class ExpressionEditor:
    """Dueño del estado de la calculadora durante la sesión."""

    def __init__(self, engine, state: CalculatorState | None = None):
        self.engine = engine
        self.state = state if state is not None else CalculatorState()

    def dispatch(self, event: InputEvent) -> CalculatorState:
        self.state = transition(self.state, event, self.engine)
        logger.debug(
            "Input event",
            kind=event.kind.value,
            value=event.value,
            expression=self.state.expression,
            result=self.state.result,
        )
        return self.state

    def refresh(self) -> CalculatorState:
        """Reevalúa la expresión actual sin modificarla."""
        self.state = _with_expression(self.state, self.state.expression, self.engine)
        return self.state

    @property
    def memory_text(self) -> str | None:
        """Texto del indicador de memoria, o ``None`` si la memoria es 0."""
        if self.state.memory == 0:
            return None
        return format_result(self.state.memory)
