"""
Matrix Errors - таксономия ошибок матричного ядра

Каждая ошибка несёт ErrorKind, чтобы вызывающий код (калькулятор, CLI)
мог различать причины отказа без разбора текста сообщения.

ПРАВИЛА:
1. Нарушение предусловия → исключение в точке обнаружения
2. Частичный результат никогда не возвращается
3. Ядро не логирует и не печатает, только сигнализирует вызывающему
4. Вырожденность в determinant - НЕ ошибка (результат 0.0)
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Вид отказа матричной операции"""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_FORMAT = "INVALID_FORMAT"
    DIMENSION_MISMATCH = "DIMENSION_MISMATCH"
    SINGULAR_MATRIX = "SINGULAR_MATRIX"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MatrixError(Exception):
    """
    Базовый класс всех ошибок матричного ядра.

    Attributes:
        kind: ErrorKind, уточняется в подклассах
    """

    kind: ErrorKind


class InvalidArgumentError(MatrixError, ValueError):
    """
    Некорректные параметры построения или операции.

    Примеры: rows <= 0, columns <= 0, отсутствующие данные,
    нецелая степень, нераспознанный скаляр.
    """

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidMatrixFormatError(MatrixError, ValueError):
    """
    Входной массив не прошёл проверку формы.

    Примеры: ноль строк, строки разной длины, нечисловое значение.
    """

    kind = ErrorKind.INVALID_FORMAT


class DimensionMismatchError(MatrixError, ValueError):
    """
    Нарушено предусловие операции по размерам.

    Примеры: сложение матриц разного размера, A.columns != B.rows
    при умножении, неквадратная матрица для determinant/inverse/power.
    """

    kind = ErrorKind.DIMENSION_MISMATCH


class SingularMatrixError(MatrixError, ArithmeticError):
    """
    Матрица вырождена: |pivot| < EPS_PIVOT при исключении.

    Возникает в inverse и в power с отрицательной степенью.
    """

    kind = ErrorKind.SINGULAR_MATRIX
