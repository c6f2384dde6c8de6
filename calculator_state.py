"""Estado de la calculadora."""

from dataclasses import dataclass

from result_formatter import ERROR_TEXT


@dataclass(frozen=True)
class CalculatorState:
    """Expresión en edición, su resultado y la memoria.

    ``result`` es siempre la última evaluación de ``expression`` (``"0"``
    si está vacía). ``memory`` sobrevive a AC hasta que se pulsa MC.
    """

    expression: str = ""
    result: str = "0"
    memory: float = 0.0

    @property
    def has_error(self) -> bool:
        return self.result == ERROR_TEXT
