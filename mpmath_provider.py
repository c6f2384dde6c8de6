"""Proveedor matemático basado en mpmath, a precisión de doble fija."""

from __future__ import annotations

from mpmath import mp

from formula_evaluator import EvaluationFailure


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    WORKING_DIGITS = 15
    POWER_SCALE_LIMIT = 1100  # log2 de la magnitud; un double llega a 1024

    def __init__(self, angle_mode: str = "rad"):
        self._angle_mode = "rad"
        self.angle_mode = angle_mode

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    def _trig(self, fn):
        mode = self._angle_mode

        def wrapped(x):
            with mp.workdps(self.WORKING_DIGITS):
                value = mp.radians(x) if mode == "deg" else x
                return fn(value)

        return wrapped

    def _plain(self, fn):
        def wrapped(x):
            with mp.workdps(self.WORKING_DIGITS):
                return fn(x)

        return wrapped

    def _power(self, base, exponent):
        # Más allá del rango de un double el resultado es ±inf o 0; así
        # 9^9^9^9 no lanza una exponenciación entera exacta interminable.
        with mp.workdps(self.WORKING_DIGITS):
            if base == 1 or exponent == 0:
                return mp.mpf(1)
            scale = exponent * mp.log(abs(base), 2)
            if scale > self.POWER_SCALE_LIMIT:
                return mp.inf
            if scale < -self.POWER_SCALE_LIMIT:
                return mp.mpf(0)
            return mp.power(base, exponent)

    def build_namespace(self) -> dict:
        with mp.workdps(self.WORKING_DIGITS):
            pi = mp.mpf(mp.pi)
            e = mp.mpf(mp.e)

        return {
            "sin": self._trig(mp.sin),
            "cos": self._trig(mp.cos),
            "tan": self._trig(mp.tan),
            "log": self._plain(mp.log),
            "log10": self._plain(mp.log10),
            "sqrt": self._plain(mp.sqrt),
            "pow": self._power,
            "mpf": mp.mpf,
            "pi": pi,
            "e": e,
        }

    @staticmethod
    def promote_literal(literal: str) -> str:
        # "3." y ".5" quedan como "3.0" y "0.5"
        mantissa, sep, exponent = literal.lower().partition("e")
        if mantissa.startswith("."):
            mantissa = "0" + mantissa
        if mantissa.endswith("."):
            mantissa += "0"
        return f'mpf("{mantissa}{sep}{exponent}")'

    @staticmethod
    def to_float(value) -> float:
        if isinstance(value, mp.mpc):
            raise EvaluationFailure("Resultado complejo")
        if isinstance(value, bool) or not isinstance(value, (mp.mpf, int, float)):
            raise EvaluationFailure(f"Resultado no real: {value!r}")
        if isinstance(value, mp.mpf) and not mp.isfinite(value):
            raise EvaluationFailure("Resultado no finito")
        return float(value)
