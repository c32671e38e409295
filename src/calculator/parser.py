"""Matrix Parser - текстовый ввод матриц, скаляров и степеней.

Форматы матрицы:
- Свободный текст: строки через перевод строки или ';', числа в строке
  через пробел, табуляцию или запятую. Пустые строки пропускаются.
- JSON: текст, начинающийся с '[', например [[1, 2], [3, 4]].
  Проверяется по контракту src/core/contracts/schema/matrix.json.

Все ошибки формы ввода → InvalidMatrixFormatError,
ошибки скаляра/степени → InvalidArgumentError.
"""

import json
import logging
import re
from typing import Final

from jsonschema import ValidationError

from src.core.contracts import MatrixPayloadValidator
from src.core.math import InvalidArgumentError, InvalidMatrixFormatError, Matrix

logger = logging.getLogger(__name__)


PARSE_HINT: Final[str] = (
    "Format: rows separated by a new line or ';'. "
    "Numbers in a row are separated by spaces, tabs or commas. "
    "A JSON array of rows such as [[1, 2], [3, 4]] is also accepted."
)

_ROW_SPLIT: Final = re.compile(r"[\n;]")
_FIELD_SPLIT: Final = re.compile(r"[ \t,]+")


def parse_matrix(text: str | None) -> Matrix:
    """Разбор текста матрицы.

    Args:
        text: Свободный текст или JSON массив строк

    Returns:
        Новая матрица

    Raises:
        InvalidMatrixFormatError: Пустой ввод, строки разной длины,
            нераспознанное число, невалидный JSON
    """
    if text is None or not text.strip():
        raise InvalidMatrixFormatError("Empty matrix input.")

    stripped = text.strip()
    if stripped.startswith("["):
        return _parse_json_matrix(stripped)

    lines = [line.strip() for line in _ROW_SPLIT.split(text)]
    lines = [line for line in lines if line]
    if not lines:
        raise InvalidMatrixFormatError("No matrix rows found.")

    rows: list[list[float]] = []
    columns = -1

    for i, line in enumerate(lines, start=1):
        parts = [part for part in _FIELD_SPLIT.split(line) if part]
        if columns == -1:
            columns = len(parts)

        if len(parts) != columns:
            raise InvalidMatrixFormatError(
                f"Row {i} has wrong length (expected {columns}, got {len(parts)})."
            )

        row = []
        for j, part in enumerate(parts, start=1):
            try:
                row.append(float(part))
            except ValueError:
                raise InvalidMatrixFormatError(
                    f"Cannot parse number at row {i}, column {j}: '{part}'"
                ) from None
        rows.append(row)

    matrix = Matrix.from_rows(rows)
    logger.debug("Parsed %dx%d matrix from text", matrix.rows, matrix.columns)
    return matrix


def _parse_json_matrix(text: str) -> Matrix:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidMatrixFormatError(f"Invalid JSON matrix: {e.msg}") from e

    try:
        MatrixPayloadValidator().validate(payload)
    except ValidationError as e:
        raise InvalidMatrixFormatError(f"Invalid JSON matrix: {e.message}") from e

    matrix = Matrix.from_rows(payload)
    logger.debug("Parsed %dx%d matrix from JSON", matrix.rows, matrix.columns)
    return matrix


def parse_scalar(text: str | None) -> float:
    """Разбор скаляра (float, инвариантный формат: '2.5', '-1e3').

    Raises:
        InvalidArgumentError: Если текст не является числом
    """
    try:
        return float((text or "").strip())
    except ValueError:
        raise InvalidArgumentError(f"Invalid scalar: '{text}'") from None


def parse_exponent(text: str | None) -> int:
    """Разбор целой степени ('3', '-2').

    Raises:
        InvalidArgumentError: Если текст не является целым числом
    """
    try:
        return int((text or "").strip())
    except ValueError:
        raise InvalidArgumentError(f"Power must be an integer: '{text}'") from None
