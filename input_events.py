"""Eventos de entrada comunes a teclado y botones.

Tanto un clic como una tecla se convierten en un ``InputEvent``; el editor
solo conoce este tipo, así que ambas vías se comportan igual.
"""

from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    DIGIT = "digit"
    OPERATOR = "operator"
    FUNCTION = "function"
    PARENTHESIS = "parenthesis"
    DECIMAL = "decimal"
    BACKSPACE = "backspace"
    CLEAR = "clear"
    EQUALS = "equals"
    MEMORY = "memory"


OPERATORS = ("+", "−", "×", "÷")  # + − × ÷
FUNCTIONS = ("sin", "cos", "tan", "ln", "log", "√", "x²", "x^y",
             "π", "e")
MEMORY_KEYS = ("MC", "MR", "M+", "M-")

_VALID_VALUES = {
    EventKind.DIGIT: tuple("0123456789"),
    EventKind.OPERATOR: OPERATORS,
    EventKind.FUNCTION: FUNCTIONS,
    EventKind.PARENTHESIS: ("(", ")"),
    EventKind.MEMORY: MEMORY_KEYS,
}


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    value: str = ""

    def __post_init__(self):
        valid = _VALID_VALUES.get(self.kind)
        if valid is not None and self.value not in valid:
            raise ValueError(f"Valor inválido para {self.kind.value}: {self.value!r}")


# ── Teclado ──────────────────────────────────────────────────────

_KEY_OPERATORS = {
    "+": "+",
    "-": "−",
    "*": "×",
    "/": "÷",
}

_TK_KEYSYMS = {
    "Return": "Enter",
    "KP_Enter": "Enter",
    "BackSpace": "Backspace",
    "Escape": "Escape",
}


def key_from_tk(keysym: str, char: str) -> str:
    """Nombre de tecla a partir de un evento ``<Key>`` de Tk."""
    return _TK_KEYSYMS.get(keysym, char)


def event_from_key(key: str) -> InputEvent | None:
    """Traduce una tecla al evento equivalente, o ``None`` si no aplica."""
    if len(key) == 1 and key.isdigit() and key.isascii():
        return InputEvent(EventKind.DIGIT, key)
    if key in _KEY_OPERATORS:
        return InputEvent(EventKind.OPERATOR, _KEY_OPERATORS[key])
    if key == ".":
        return InputEvent(EventKind.DECIMAL)
    if key in ("(", ")"):
        return InputEvent(EventKind.PARENTHESIS, key)
    if key in ("Enter", "="):
        return InputEvent(EventKind.EQUALS)
    if key == "Backspace":
        return InputEvent(EventKind.BACKSPACE)
    if key in ("Escape", "c", "C"):
        return InputEvent(EventKind.CLEAR)
    return None
