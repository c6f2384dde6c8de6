"""Evaluación numérica de expresiones infijas convencionales.

El evaluador recibe expresiones ya traducidas a sintaxis convencional
(``2 * sin ( pi / 2 ) ^ 2``) y devuelve un ``float``. Las funciones y
constantes las aporta un proveedor intercambiable (``PythonMathProvider``
o ``MPMathProvider``).
"""

import ast
import math
import re


class EvaluationFailure(ValueError):
    """La expresión no se puede evaluar a un número real finito."""


class PythonMathProvider:
    """Provee funciones y constantes matemáticas en un namespace seguro."""

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

    def build_namespace(self) -> dict:
        mode = self._angle_mode

        def _trig(fn):
            def w(x):
                return fn(math.radians(x) if mode == "deg" else x)

            return w

        return {
            "sin": _trig(math.sin),
            "cos": _trig(math.cos),
            "tan": _trig(math.tan),
            "log": math.log,
            "log10": math.log10,
            "sqrt": math.sqrt,
            "pow": self._power,
            "pi": math.pi,
            "e": math.e,
        }

    @staticmethod
    def _power(base, exponent):
        try:
            return base ** exponent
        except OverflowError:
            # Desborda a infinito, como 1 ^ (2 ^ 2000) que sigue valiendo 1.
            return math.inf

    @staticmethod
    def promote_literal(literal: str) -> str:
        # Literales flotantes: evita enteros gigantes con ** y ceros a la izquierda.
        return repr(float(literal))

    @staticmethod
    def to_float(value) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EvaluationFailure(f"Resultado no real: {value!r}")
        if not math.isfinite(value):
            raise EvaluationFailure("Resultado no finito")
        return float(value)


def _as_power_call(node):
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Pow):
        func = ast.copy_location(ast.Name(id="pow", ctx=ast.Load()), node)
        call = ast.Call(func=func, args=[node.left, node.right], keywords=[])
        return ast.copy_location(call, node)
    return node


def _route_powers(tree: ast.Expression) -> ast.Expression:
    """Sustituye ``a ** b`` por ``pow(a, b)`` del proveedor, sin recursión."""
    stack = [tree]
    while stack:
        node = stack.pop()
        for field, value in ast.iter_fields(node):
            if isinstance(value, list):
                value[:] = [_as_power_call(item) for item in value]
                stack.extend(item for item in value if isinstance(item, ast.AST))
            elif isinstance(value, ast.AST):
                value = _as_power_call(value)
                setattr(node, field, value)
                stack.append(value)
    return tree


class FormulaEvaluator:
    """Evalúa expresiones infijas con ``+ - * / ^`` y funciones científicas."""

    _ALLOWED_CHARS = re.compile(r"^[\d\s+\-*/^().a-zA-Z]*$")
    _NUMBER_LITERAL = re.compile(
        r"(?<![\w.])(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?"
    )
    _FUNCTION_IDENTIFIERS = {"sin", "cos", "tan", "log", "log10", "sqrt"}
    _CONSTANT_IDENTIFIERS = {"pi", "e"}
    _ALLOWED_IDENTIFIERS = _FUNCTION_IDENTIFIERS | _CONSTANT_IDENTIFIERS

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()

    @property
    def provider(self):
        return self._provider

    def evaluate(self, expression: str) -> float:
        """Evalúa la expresión y devuelve su valor real.

        Raises:
            EvaluationFailure: expresión inválida, nombre desconocido o
                resultado no real.
            ZeroDivisionError: división por cero.
        """
        if not expression or not expression.strip():
            raise EvaluationFailure("Expresión vacía")

        self._validate_raw_expression(expression)
        processed = self._preprocess(expression)
        namespace = self._provider.build_namespace()

        try:
            tree = _route_powers(ast.parse(processed, mode="eval"))
            value = eval(compile(tree, "<expresión>", "eval"),
                         {"__builtins__": {}}, namespace)
        except SyntaxError as exc:
            raise EvaluationFailure("Error de sintaxis") from exc
        except NameError as exc:
            raise EvaluationFailure(f"Desconocido: {exc}") from exc

        return self._provider.to_float(value)

    def _validate_raw_expression(self, expression: str):
        if not self._ALLOWED_CHARS.fullmatch(expression):
            raise EvaluationFailure("Expresión contiene caracteres inválidos")
        if "**" in expression:
            raise EvaluationFailure("Use '^' para potencias")

    def _preprocess(self, expr: str) -> str:
        expr = expr.strip()
        self._validate_identifiers(expr)
        expr = expr.replace("^", "**")
        return self._promote_numeric_literals(expr)

    def _promote_numeric_literals(self, expr: str) -> str:
        return self._NUMBER_LITERAL.sub(
            lambda m: self._provider.promote_literal(m.group(0)),
            expr,
        )

    def _validate_identifiers(self, expr: str):
        # Los exponentes de los literales (1e-7) no son identificadores.
        expr = self._NUMBER_LITERAL.sub("0", expr)

        for name in re.findall(r"[A-Za-z][A-Za-z0-9]*", expr):
            if name not in self._ALLOWED_IDENTIFIERS:
                raise EvaluationFailure(f"Identificador no permitido: {name}")

        for function_name in self._FUNCTION_IDENTIFIERS:
            if re.search(rf"\b{function_name}\b(?!\s*\()", expr):
                raise EvaluationFailure(f"Falta '(' después de {function_name}")

        for constant_name in self._CONSTANT_IDENTIFIERS:
            if re.search(rf"\b{constant_name}\b\s*\(", expr):
                raise EvaluationFailure(f"{constant_name} no es una función")
