"""Formato de resultados numéricos para la pantalla."""

import math
from decimal import Decimal

ERROR_TEXT = "Error"

SCI_UPPER_LIMIT = 1e10
SCI_LOWER_LIMIT = 1e-6
SCI_FRACTION_DIGITS = 6
FIXED_SIGNIFICANT_DIGITS = 10


def format_result(value: float) -> str:
    """Devuelve el texto que se muestra para ``value``.

    Notación exponencial para magnitudes ``>= 1e10`` o ``< 1e-6`` (sin
    contar el cero), notación fija con 10 cifras significativas en otro
    caso. Los valores no finitos se muestran como ``"Error"``.
    """
    if not math.isfinite(value):
        return ERROR_TEXT

    magnitude = abs(value)
    if magnitude >= SCI_UPPER_LIMIT or 0 < magnitude < SCI_LOWER_LIMIT:
        return _format_exponential(value)

    if value == 0:
        return "0"

    return _format_fixed(value)


def _format_exponential(value: float) -> str:
    mantissa, exponent = f"{value:.{SCI_FRACTION_DIGITS}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _format_fixed(value: float) -> str:
    rounded = f"{value:.{FIXED_SIGNIFICANT_DIGITS}g}"
    # 'g' pasa a exponencial por debajo de 1e-4; Decimal lo expande.
    return format(Decimal(rounded), "f")
