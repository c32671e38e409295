"""Matrix Calculator - фасад операций над текстовым вводом.

Принимает текст матриц A и B, выбранную операцию и (при необходимости)
текст скаляра или степени. Возвращает CalculationResult: явный успех
с отформатированным результатом или отказ с ErrorKind.

Порядок обработки:
1. Разбор матрицы A (и B для add/subtract/multiply)
2. Разбор скаляра / степени для scalar_multiply / power
3. Выполнение операции ядра
4. Форматирование результата

Преобразуются в отказ только MatrixError; прочие исключения
(ошибки программирования) пробрасываются.
"""

import logging
from dataclasses import dataclass

from src.calculator.parser import parse_exponent, parse_matrix, parse_scalar
from src.core.domain import CalculationResult, Operation
from src.core.math import (
    DISPLAY_PRECISION,
    EPS_PIVOT,
    Matrix,
    MatrixError,
    format_matrix,
    format_value,
    validate_eps,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class CalculatorConfig:
    """Конфигурация калькулятора.

    pivot_eps передаётся в determinant / inverse / rank / power.
    Точность вывода задаётся числом значащих цифр.
    """

    pivot_eps: float = EPS_PIVOT
    matrix_precision: int = DISPLAY_PRECISION
    scalar_precision: int = 8
    default_scalar: str = "1"
    default_power: str = "2"

    def __post_init__(self):
        validate_eps(self.pivot_eps)
        if self.matrix_precision < 1 or self.scalar_precision < 1:
            raise ValueError(
                f"precision must be >= 1, got matrix={self.matrix_precision}, "
                f"scalar={self.scalar_precision}"
            )


# =============================================================================
# CALCULATOR
# =============================================================================


class MatrixCalculator:
    """Фасад калькулятора матриц без пользовательского интерфейса.

    Example:
        >>> calc = MatrixCalculator()
        >>> result = calc.evaluate("determinant", "1 2; 3 4")
        >>> result.ok, result.text
        (True, '-2')
    """

    def __init__(self, config: CalculatorConfig | None = None):
        """
        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or CalculatorConfig()

    def evaluate(
        self,
        operation: Operation | str,
        matrix_a: str | None,
        matrix_b: str | None = None,
        scalar: str | None = None,
        power: str | None = None,
    ) -> CalculationResult:
        """Выполнение операции над текстовым вводом.

        Args:
            operation: Operation или её строковое значение ('add', 'rank', ...)
            matrix_a: текст матрицы A
            matrix_b: текст матрицы B (для add / subtract / multiply)
            scalar: текст скаляра (для scalar_multiply, default из config)
            power: текст степени (для power, default из config)

        Returns:
            CalculationResult (ok=False с error_kind при MatrixError)

        Raises:
            ValueError: Если operation не является известной операцией
        """
        operation = Operation(operation)
        logger.debug("Evaluating %s", operation.value)

        try:
            result = self._dispatch(operation, matrix_a, matrix_b, scalar, power)
        except MatrixError as e:
            logger.info("%s failed (%s): %s", operation.value, e.kind.value, e)
            return CalculationResult.from_error(operation, e)

        logger.debug("%s succeeded", operation.value)
        return result

    def _dispatch(
        self,
        operation: Operation,
        matrix_a: str | None,
        matrix_b: str | None,
        scalar: str | None,
        power: str | None,
    ) -> CalculationResult:
        eps = self.config.pivot_eps
        a = parse_matrix(matrix_a)

        if operation.needs_second_matrix:
            b = parse_matrix(matrix_b)
            if operation == Operation.ADD:
                return self._matrix_result(operation, a.add(b))
            if operation == Operation.SUBTRACT:
                return self._matrix_result(operation, a.subtract(b))
            return self._matrix_result(operation, a.multiply(b))

        if operation == Operation.SCALAR_MULTIPLY:
            value = parse_scalar(self.config.default_scalar if scalar is None else scalar)
            return self._matrix_result(operation, a.multiply_scalar(value))

        if operation == Operation.TRANSPOSE:
            return self._matrix_result(operation, a.transpose())

        if operation == Operation.DETERMINANT:
            det = a.determinant(eps=eps)
            return CalculationResult.from_scalar(
                operation, det, format_value(det, self.config.scalar_precision)
            )

        if operation == Operation.INVERSE:
            return self._matrix_result(operation, a.inverse(eps=eps))

        if operation == Operation.RANK:
            return CalculationResult.from_rank(operation, a.rank(eps=eps))

        exponent = parse_exponent(self.config.default_power if power is None else power)
        return self._matrix_result(operation, a.power(exponent, eps=eps))

    def _matrix_result(self, operation: Operation, matrix: Matrix) -> CalculationResult:
        return CalculationResult.from_matrix(
            operation, matrix, format_matrix(matrix, self.config.matrix_precision)
        )
