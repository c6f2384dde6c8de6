"""Fixtures compartidas por las pruebas de la calculadora."""

import pytest

from calculator_engine import CalculatorEngine, build_provider
from expression_editor import ExpressionEditor

BACKENDS = ["python", "mpmath"]


@pytest.fixture(params=BACKENDS)
def engine(request):
    """Motor de cálculo con cada proveedor numérico."""
    return CalculatorEngine(build_provider(request.param))


@pytest.fixture(params=BACKENDS)
def editor(request):
    """Editor sobre cada proveedor numérico, mpmath incluido."""
    return ExpressionEditor(CalculatorEngine(build_provider(request.param)))
