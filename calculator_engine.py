"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, el adaptador entre la
expresión de pantalla y el evaluador numérico. Es la única frontera de
errores del sistema: cualquier fallo de evaluación se muestra como
``"Error"`` y nunca se propaga a la interfaz.

Contrato de interfaz:
    - evaluate(expression: str) -> str
    - angle_mode: propiedad 'rad' | 'deg'
"""

import structlog

from formula_evaluator import FormulaEvaluator, PythonMathProvider
from glyph_translator import translate
from result_formatter import ERROR_TEXT, format_result

logger = structlog.get_logger()


class CalculatorEngine:
    """Evalúa expresiones de pantalla y devuelve el texto a mostrar."""

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._provider.angle_mode = mode

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Una expresión vacía vale ``"0"``; una inválida, ``"Error"``.
        """
        if not expression or not expression.strip():
            return "0"

        try:
            value = self._evaluator.evaluate(translate(expression))
        except (ValueError, ArithmeticError, TypeError,
                RecursionError, MemoryError) as exc:
            logger.debug(
                "Evaluation failed",
                expression=expression,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return ERROR_TEXT

        return format_result(value)


def build_provider(backend: str = "python", angle_mode: str = "rad"):
    """Crea el proveedor numérico indicado ('mpmath' o 'python')."""
    if backend == "mpmath":
        from mpmath_provider import MPMathProvider

        return MPMathProvider(angle_mode=angle_mode)
    if backend == "python":
        return PythonMathProvider(angle_mode=angle_mode)
    raise ValueError(f"Proveedor numérico desconocido: {backend}")
