"""
Numerical Safeguards - epsilon-политика для матричных алгоритмов

Модуль задаёт единые численные пороги для всех операций с матрицами:
- Порог вырожденности для выбора ведущего элемента (pivot)
- Толерантности для сравнения float (проверки A·A⁻¹ ≈ I и т.п.)
- Валидация пользовательского epsilon

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Порог pivot фиксирован (EPS_PIVOT = 1e-12) и не выводится заново
2. Pivot с |value| < eps считается нулевым (строгое сравнение)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог вырожденности для ведущего элемента при исключении Гаусса.
# |pivot| < EPS_PIVOT → столбец считается нулевым:
#   determinant → 0.0, inverse → SingularMatrixError, rank → столбец пропущен
EPS_PIVOT: Final[float] = 1e-12

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
# Используется в Matrix.allclose для поэлементной проверки
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-9


# =============================================================================
# ВАЛИДАЦИЯ EPSILON
# =============================================================================


def validate_eps(eps: float) -> None:
    """
    Проверка, что epsilon пригоден как порог вырожденности.

    Args:
        eps: Порог (должен быть конечным и > 0)

    Raises:
        ValueError: Если eps <= 0 или NaN/Inf
    """
    if not math.isfinite(eps) or eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_negligible(value: float, eps: float = EPS_PIVOT) -> bool:
    """
    Проверка, пренебрежимо ли мало значение как ведущий элемент.

    Args:
        value: Кандидат в pivot
        eps: Порог вырожденности (default: EPS_PIVOT)

    Returns:
        True если abs(value) < eps

    Examples:
        >>> is_negligible(1e-13)
        True
        >>> is_negligible(-0.5)
        False
        >>> is_negligible(1e-12)
        False
    """
    return abs(value) < eps


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм (как math.isclose):
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: 1e-9)
        abs_tol: Абсолютная толерантность (default: 1e-9)

    Returns:
        True если значения близки с учётом толерантности

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
        >>> is_close(0.0, 1e-10)
        True
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
