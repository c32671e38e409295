"""
CalculationResult - Модель результата операции калькулятора

Immutable Pydantic модель: явное значение «успех / отказ» вместо
исключения, которое видно в сигнатуре вызывающего кода.

ИНВАРИАНТЫ:
1. ok=True ⇔ error_kind is None
2. При успехе задан ровно один из matrix / scalar / rank
3. При отказе matrix, scalar и rank не заданы, message содержит причину
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.core.math.errors import ErrorKind, MatrixError
from src.core.math.matrix import Matrix


# =============================================================================
# ENUMS
# =============================================================================


class Operation(str, Enum):
    """Операция калькулятора"""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    SCALAR_MULTIPLY = "scalar_multiply"
    TRANSPOSE = "transpose"
    DETERMINANT = "determinant"
    INVERSE = "inverse"
    RANK = "rank"
    POWER = "power"

    @property
    def needs_second_matrix(self) -> bool:
        """True для бинарных матричных операций (нужна матрица B)."""
        return self in (Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY)


# =============================================================================
# CALCULATION RESULT MODEL
# =============================================================================


class CalculationResult(BaseModel):
    """
    Результат одной операции калькулятора.

    Immutable модель (frozen=True). Создаётся через from_matrix /
    from_scalar / from_rank / from_error.
    """

    operation: Operation = Field(..., description="Выполненная операция")
    ok: bool = Field(..., description="True если операция успешна")
    error_kind: Optional[ErrorKind] = Field(
        None, description="Вид отказа (None при успехе)"
    )
    message: str = Field(..., description="Статусное сообщение для пользователя")

    # Полезная нагрузка (ровно одно поле при успехе)
    matrix: Optional[list[list[float]]] = Field(
        None, description="Матрица-результат, список строк"
    )
    scalar: Optional[float] = Field(None, description="Скалярный результат (determinant)")
    rank: Optional[int] = Field(None, ge=0, description="Ранг матрицы")

    text: str = Field("", description="Отформатированный результат")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_outcome(self) -> "CalculationResult":
        """Согласованность ok / error_kind / полезной нагрузки."""
        payloads = [p for p in (self.matrix, self.scalar, self.rank) if p is not None]

        if self.ok:
            if self.error_kind is not None:
                raise ValueError("successful result must not carry error_kind")
            if len(payloads) != 1:
                raise ValueError(
                    f"successful result must carry exactly one payload, got {len(payloads)}"
                )
        else:
            if self.error_kind is None:
                raise ValueError("failed result must carry error_kind")
            if payloads:
                raise ValueError("failed result must not carry a payload")

        return self

    @classmethod
    def from_matrix(
        cls, operation: Operation, matrix: Matrix, text: str, message: str = "Done."
    ) -> "CalculationResult":
        return cls(
            operation=operation, ok=True, message=message, matrix=matrix.to_list(), text=text
        )

    @classmethod
    def from_scalar(
        cls, operation: Operation, value: float, text: str, message: str = "Done."
    ) -> "CalculationResult":
        return cls(operation=operation, ok=True, message=message, scalar=value, text=text)

    @classmethod
    def from_rank(
        cls, operation: Operation, value: int, message: str = "Done."
    ) -> "CalculationResult":
        return cls(operation=operation, ok=True, message=message, rank=value, text=str(value))

    @classmethod
    def from_error(cls, operation: Operation, error: MatrixError) -> "CalculationResult":
        """Отказ с видом ошибки и её сообщением."""
        return cls(operation=operation, ok=False, error_kind=error.kind, message=str(error))

    def to_matrix(self) -> Matrix | None:
        """Матрица-результат как Matrix (None для скалярных и неуспешных)."""
        if self.matrix is None:
            return None
        return Matrix.from_rows(self.matrix)
