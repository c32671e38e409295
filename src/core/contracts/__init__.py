"""
Contract Validation Module

Модуль для валидации JSON контрактов входных данных калькулятора.
"""

from .validators import (
    ContractValidator,
    MatrixPayloadValidator,
    SchemaLoader,
    validate_matrix_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MatrixPayloadValidator",
    # Functions
    "validate_matrix_payload",
]
