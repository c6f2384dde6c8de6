"""Traducción de glifos de pantalla a sintaxis del evaluador.

La expresión de la pantalla (``2π×√(9)−x²``) se recorre token a token; cada
glifo se traduce una sola vez, de modo que ningún reemplazo puede afectar al
resultado de otro (``ln`` nunca termina como ``log10`` y la ``e`` de un
exponente no se confunde con la constante de Euler).
"""

import re
from dataclasses import dataclass

from formula_evaluator import EvaluationFailure

NUMBER = "number"
OPERATOR = "operator"
FUNCTION = "function"
CONSTANT = "constant"
LPAREN = "lparen"
RPAREN = "rparen"

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?)
  | (?P<square>x²|²)
  | (?P<power>x\^y|\^)
  | (?P<operator>[+\-*/×÷−])
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<root>√)
  | (?P<pi>π)
  | (?P<name>[A-Za-z]+)
    """,
    re.VERBOSE,
)

_OPERATORS = {
    "+": "+",
    "-": "-",
    "−": "-",
    "*": "*",
    "×": "*",
    "/": "/",
    "÷": "/",
}

_FUNCTIONS = {
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "ln": "log",
    "log": "log10",
    "sqrt": "sqrt",
}

_CONSTANTS = {
    "pi": "pi",
    "e": "e",
}

_VALUE_END = {NUMBER, CONSTANT, RPAREN}
_VALUE_START = {NUMBER, CONSTANT, FUNCTION, LPAREN}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str


def tokenize(expression: str) -> list[Token]:
    """Divide la expresión de pantalla en tokens del evaluador."""
    tokens: list[Token] = []
    pos = 0

    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise EvaluationFailure(f"Símbolo no reconocido: {expression[pos]!r}")
        pos = match.end()
        group = match.lastgroup
        text = match.group(0)

        if group == "space":
            continue
        if group == "number":
            tokens.append(Token(NUMBER, text))
        elif group == "square":
            tokens.append(Token(OPERATOR, "^"))
            tokens.append(Token(NUMBER, "2"))
        elif group == "power":
            tokens.append(Token(OPERATOR, "^"))
        elif group == "operator":
            tokens.append(Token(OPERATOR, _OPERATORS[text]))
        elif group == "lparen":
            tokens.append(Token(LPAREN, "("))
        elif group == "rparen":
            tokens.append(Token(RPAREN, ")"))
        elif group == "root":
            tokens.append(Token(FUNCTION, "sqrt"))
        elif group == "pi":
            tokens.append(Token(CONSTANT, "pi"))
        elif text in _FUNCTIONS:
            tokens.append(Token(FUNCTION, _FUNCTIONS[text]))
        elif text in _CONSTANTS:
            tokens.append(Token(CONSTANT, _CONSTANTS[text]))
        else:
            raise EvaluationFailure(f"Identificador no permitido: {text}")

    return _insert_implicit_mult(tokens)


def _insert_implicit_mult(tokens: list[Token]) -> list[Token]:
    result: list[Token] = []
    for tok in tokens:
        if result:
            prev = result[-1]
            # Dos números seguidos (1.2.3) son un error, no un producto.
            adjacent_numbers = prev.kind == NUMBER and tok.kind == NUMBER
            if (
                prev.kind in _VALUE_END
                and tok.kind in _VALUE_START
                and not adjacent_numbers
            ):
                result.append(Token(OPERATOR, "*"))
        result.append(tok)
    return result


def translate(expression: str) -> str:
    """Devuelve la expresión en sintaxis convencional para el evaluador.

    >>> translate("2π×√(9)")
    '2 * pi * sqrt ( 9 )'
    """
    return " ".join(tok.text for tok in tokenize(expression))
