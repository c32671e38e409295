"""
Core math modules для Matrix Calculator

Плотная матрица, численные пороги и таксономия ошибок.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_PIVOT,
    # Epsilon comparisons
    is_close,
    is_negligible,
    # Validation
    validate_eps,
)

# Errors
from src.core.math.errors import (
    DimensionMismatchError,
    ErrorKind,
    InvalidArgumentError,
    InvalidMatrixFormatError,
    MatrixError,
    SingularMatrixError,
)

# Matrix
from src.core.math.matrix import (
    COLUMN_SEPARATOR,
    DISPLAY_PRECISION,
    ROW_SEPARATOR,
    Matrix,
    format_matrix,
    format_value,
)

__all__ = [
    # Numerical Safeguards - Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_PIVOT",
    # Numerical Safeguards - Epsilon comparisons
    "is_close",
    "is_negligible",
    # Numerical Safeguards - Validation
    "validate_eps",
    # Errors
    "ErrorKind",
    "MatrixError",
    "InvalidArgumentError",
    "InvalidMatrixFormatError",
    "DimensionMismatchError",
    "SingularMatrixError",
    # Matrix - Constants
    "COLUMN_SEPARATOR",
    "DISPLAY_PRECISION",
    "ROW_SEPARATOR",
    # Matrix - Types
    "Matrix",
    # Matrix - Formatting
    "format_matrix",
    "format_value",
]
