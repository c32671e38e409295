"""Calculator - текстовый ввод, выполнение операций и CLI поверх ядра.

- parser: текст / JSON → Matrix, скаляр, степень
- calculator: MatrixCalculator.evaluate → CalculationResult
- cli: matcalc (argparse)
"""

from .calculator import CalculatorConfig, MatrixCalculator
from .parser import PARSE_HINT, parse_exponent, parse_matrix, parse_scalar

__all__ = [
    "CalculatorConfig",
    "MatrixCalculator",
    "PARSE_HINT",
    "parse_matrix",
    "parse_scalar",
    "parse_exponent",
]
