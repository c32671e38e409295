"""
Domain models and value objects.

Contains the calculator's Operation enum and the immutable
CalculationResult success/failure value.
"""

from src.core.domain.calculation import CalculationResult, Operation

__all__ = [
    "Operation",
    "CalculationResult",
]
