"""
Matrix - плотная вещественная матрица

Модуль реализует матрицу double-значений с построчным хранением:
- Построение (нулевая, из массива строк, единичная), доступ по индексу
- Поэлементные операции (add, subtract), умножение на скаляр и на матрицу
- Транспонирование и целая степень (бинарное возведение, отрицательная
  степень через обратную матрицу)
- Determinant, inverse, rank на основе исключения Гаусса с частичным
  выбором ведущего элемента (partial pivoting)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows >= 1, columns >= 1, размеры неизменны после построения
2. Хранилище всегда содержит ровно rows × columns значений
3. Все операции возвращают НОВУЮ матрицу и не изменяют операнды
4. Результат никогда не разделяет хранилище с операндами
5. |pivot| < eps → determinant = 0.0, inverse → SingularMatrixError
6. NaN/Inf не валидируются (распространяются по обычным правилам float)

Модуль не логирует и не печатает: отказ сигнализируется исключением
из src.core.math.errors.
"""

from numbers import Integral, Real
from typing import Final, Iterable, Sequence

from src.core.math.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    InvalidMatrixFormatError,
    SingularMatrixError,
)
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_PIVOT,
    is_close,
    is_negligible,
    validate_eps,
)

# =============================================================================
# ПАРАМЕТРЫ ФОРМАТИРОВАНИЯ
# =============================================================================

# Число значащих цифр при текстовом выводе элементов матрицы
DISPLAY_PRECISION: Final[int] = 6

COLUMN_SEPARATOR: Final[str] = "\t"
ROW_SEPARATOR: Final[str] = "\n"


# =============================================================================
# ВНУТРЕННИЕ ПОМОЩНИКИ ИСКЛЮЧЕНИЯ
# =============================================================================


def _find_pivot(store: list[list[float]], column: int, start_row: int) -> int:
    """
    Индекс строки >= start_row с максимальным |store[row][column]|.

    При равенстве модулей выбирается верхняя строка.
    """
    pivot_row = start_row
    max_abs = abs(store[start_row][column])

    for row in range(start_row + 1, len(store)):
        value = abs(store[row][column])
        if value > max_abs:
            max_abs = value
            pivot_row = row

    return pivot_row


def _swap_rows(store: list[list[float]], i: int, j: int) -> None:
    store[i], store[j] = store[j], store[i]


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Плотная матрица rows × columns значений float.

    Индексация (row, column), нумерация с нуля:

        >>> m = Matrix(2, 2)
        >>> m[0, 1] = 5.0
        >>> m[0, 1]
        5.0

    Значения матрицы изменяются только через индексатор m[r, c] = value.
    Арифметика и анализ всегда возвращают новый экземпляр.

    Экземпляры независимы: разные матрицы можно обрабатывать из разных
    потоков, но запись через индексатор в ОДИН экземпляр из нескольких
    потоков одновременно не потокобезопасна.
    """

    __slots__ = ("_rows", "_columns", "_data")

    def __init__(self, rows: int, columns: int):
        """
        Нулевая матрица заданного размера.

        Args:
            rows: Количество строк (> 0)
            columns: Количество столбцов (> 0)

        Raises:
            InvalidArgumentError: Если размер не целый или <= 0
        """
        for name, value in (("rows", rows), ("columns", columns)):
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")

        if rows <= 0 or columns <= 0:
            raise InvalidArgumentError(
                f"Matrix dimensions must be positive, got {rows}x{columns}"
            )

        self._rows = int(rows)
        self._columns = int(columns)
        self._data = [[0.0] * self._columns for _ in range(self._rows)]

    # -------------------------------------------------------------------------
    # Построение
    # -------------------------------------------------------------------------

    @classmethod
    def _wrap(cls, store: list[list[float]]) -> "Matrix":
        # store принадлежит новой матрице, форма проверена вызывающим
        matrix = cls.__new__(cls)
        matrix._rows = len(store)
        matrix._columns = len(store[0])
        matrix._data = store
        return matrix

    @classmethod
    def from_data(cls, data: "Matrix | Sequence[Sequence[float]] | None") -> "Matrix":
        """
        Матрица-копия существующего двумерного хранилища.

        Новая матрица никогда не разделяет хранилище с data.

        Args:
            data: Matrix или прямоугольная последовательность строк

        Returns:
            Независимая копия

        Raises:
            InvalidArgumentError: Если data отсутствует (None), пусто или не итерируемо
            InvalidMatrixFormatError: Если строки разной длины
        """
        if data is None:
            raise InvalidArgumentError("Matrix data must not be None")

        if isinstance(data, Matrix):
            return data.clone()

        try:
            rows = list(data)
        except TypeError as e:
            raise InvalidArgumentError(
                f"Matrix data must be an iterable of rows, got {type(data).__name__}"
            ) from e

        if not rows:
            raise InvalidArgumentError("Matrix data must not be empty")

        return cls.from_rows(rows)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> "Matrix":
        """
        Матрица из последовательности строк с проверкой прямоугольности.

        Args:
            rows: Строки матрицы; все строки одной длины, минимум одна строка

        Returns:
            Матрица размера (len(rows), len(rows[0]))

        Raises:
            InvalidMatrixFormatError: Пустой ввод, пустая первая строка,
                строки разной длины, строка-текст вместо последовательности
                или значение, не представимое как float

        Examples:
            >>> Matrix.from_rows([[1, 2], [3, 4]]).shape
            (2, 2)
        """
        if rows is None:
            raise InvalidMatrixFormatError("Matrix must have at least one row")

        store: list[list[float]] = []
        columns = -1

        for i, row in enumerate(rows):
            # строка текста - не строка матрицы
            if isinstance(row, (str, bytes)):
                raise InvalidMatrixFormatError(
                    f"Row {i + 1} must be a sequence of numbers, "
                    f"got {type(row).__name__}"
                )

            try:
                values = [float(value) for value in row]
            except (TypeError, ValueError, OverflowError) as e:
                raise InvalidMatrixFormatError(
                    f"Row {i + 1} contains a non-numeric value: {e}"
                ) from e

            if columns == -1:
                columns = len(values)
                if columns == 0:
                    raise InvalidMatrixFormatError("Matrix rows must not be empty")

            if len(values) != columns:
                raise InvalidMatrixFormatError(
                    f"Matrix rows have different lengths: row {i + 1} has "
                    f"{len(values)} values, expected {columns}"
                )

            store.append(values)

        if not store:
            raise InvalidMatrixFormatError("Matrix must have at least one row")

        return cls._wrap(store)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """
        Единичная матрица n × n.

        Raises:
            InvalidArgumentError: Если n <= 0
        """
        result = cls(n, n)
        for i in range(result._rows):
            result._data[i][i] = 1.0
        return result

    # -------------------------------------------------------------------------
    # Размеры и доступ
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._columns)

    @property
    def is_square(self) -> bool:
        return self._rows == self._columns

    def _check_index(self, row: int, column: int) -> None:
        # Отрицательные индексы запрещены: m[-1, 0] не означает последнюю строку
        if not (0 <= row < self._rows and 0 <= column < self._columns):
            raise IndexError(
                f"Index ({row}, {column}) out of range for "
                f"{self._rows}x{self._columns} matrix"
            )

    def __getitem__(self, key: tuple[int, int]) -> float:
        """
        Элемент (row, column).

        Raises:
            IndexError: Если индекс вне диапазона (в том числе отрицательный)
        """
        row, column = key
        self._check_index(row, column)
        return self._data[row][column]

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        """
        Запись элемента (row, column).

        Raises:
            IndexError: Если индекс вне диапазона (в том числе отрицательный)
        """
        row, column = key
        self._check_index(row, column)
        self._data[row][column] = float(value)

    def clone(self) -> "Matrix":
        """Глубокая независимая копия."""
        return Matrix._wrap([row[:] for row in self._data])

    def to_list(self) -> list[list[float]]:
        """Значения в виде списка строк (копия)."""
        return [row[:] for row in self._data]

    # -------------------------------------------------------------------------
    # Сравнение и представление
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    # Изменяемый объект: не хэшируется
    __hash__ = None  # type: ignore[assignment]

    def allclose(
        self,
        other: "Matrix",
        rel_tol: float = EPS_FLOAT_COMPARE_REL,
        abs_tol: float = EPS_FLOAT_COMPARE_ABS,
    ) -> bool:
        """
        Поэлементное сравнение с толерантностью.

        Args:
            other: Матрица для сравнения
            rel_tol: Относительная толерантность (default: 1e-9)
            abs_tol: Абсолютная толерантность (default: 1e-9)

        Returns:
            True если размеры совпадают и все элементы близки
        """
        if self.shape != other.shape:
            return False

        return all(
            is_close(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for row_a, row_b in zip(self._data, other._data)
            for a, b in zip(row_a, row_b)
        )

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self._data!r})"

    def __str__(self) -> str:
        return format_matrix(self)

    # -------------------------------------------------------------------------
    # Проверки предусловий
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_operand(other: object) -> None:
        if not isinstance(other, Matrix):
            raise InvalidArgumentError(
                f"Operand must be a Matrix, got {type(other).__name__}"
            )

    def _require_square(self, operation: str) -> None:
        if self._rows != self._columns:
            raise DimensionMismatchError(
                f"{operation} is defined only for square matrices, "
                f"got {self._rows}x{self._columns}"
            )

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "Matrix") -> "Matrix":
        """
        Поэлементная сумма.

        Raises:
            DimensionMismatchError: Если размеры матриц различаются
        """
        self._check_operand(other)
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"Addition requires matrices of the same size, got "
                f"{self._rows}x{self._columns} and {other._rows}x{other._columns}"
            )

        return Matrix._wrap(
            [
                [a + b for a, b in zip(row_a, row_b)]
                for row_a, row_b in zip(self._data, other._data)
            ]
        )

    def subtract(self, other: "Matrix") -> "Matrix":
        """
        Поэлементная разность self - other.

        Raises:
            DimensionMismatchError: Если размеры матриц различаются
        """
        self._check_operand(other)
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"Subtraction requires matrices of the same size, got "
                f"{self._rows}x{self._columns} and {other._rows}x{other._columns}"
            )

        return Matrix._wrap(
            [
                [a - b for a, b in zip(row_a, row_b)]
                for row_a, row_b in zip(self._data, other._data)
            ]
        )

    def multiply_scalar(self, scalar: float) -> "Matrix":
        """Каждый элемент умножен на scalar."""
        return Matrix._wrap([[value * scalar for value in row] for row in self._data])

    def multiply(self, other: "Matrix") -> "Matrix":
        """
        Матричное произведение self (m×k) на other (k×n).

        C[i,j] = Σ A[i,k]·B[k,j]. Внешний цикл накопления идёт по общему
        индексу k внутри строки i (строка B читается последовательно).

        Raises:
            DimensionMismatchError: Если self.columns != other.rows
        """
        self._check_operand(other)
        if self._columns != other._rows:
            raise DimensionMismatchError(
                f"Number of columns of the left matrix ({self._columns}) must "
                f"equal number of rows of the right matrix ({other._rows})"
            )

        n = other._columns
        store = [[0.0] * n for _ in range(self._rows)]

        for row_a, row_c in zip(self._data, store):
            for k, a_ik in enumerate(row_a):
                row_b = other._data[k]
                for j in range(n):
                    row_c[j] += a_ik * row_b[j]

        return Matrix._wrap(store)

    def transpose(self) -> "Matrix":
        """Транспонированная матрица columns × rows."""
        return Matrix._wrap([list(column) for column in zip(*self._data)])

    def power(self, exponent: int, *, eps: float = EPS_PIVOT) -> "Matrix":
        """
        Целая степень квадратной матрицы.

        - exponent == 0 → единичная матрица
        - exponent < 0 → inverse(), затем степень -exponent
        - exponent > 0 → бинарное возведение (≈ log2(e) умножений)

        Args:
            exponent: Целая степень (любого знака)
            eps: Порог вырожденности для отрицательной степени

        Raises:
            DimensionMismatchError: Если матрица не квадратная
            InvalidArgumentError: Если exponent не целое число
            SingularMatrixError: Если exponent < 0 и матрица вырождена
        """
        self._require_square("Matrix power")

        if isinstance(exponent, bool) or not isinstance(exponent, Integral):
            raise InvalidArgumentError(f"Exponent must be an integer, got {exponent!r}")
        validate_eps(eps)

        e = int(exponent)

        if e == 0:
            return Matrix.identity(self._rows)

        if e < 0:
            return self.inverse(eps=eps).power(-e, eps=eps)

        result = Matrix.identity(self._rows)
        base = self.clone()

        while e > 0:
            if e & 1:
                result = result.multiply(base)
            e >>= 1
            if e:
                base = base.multiply(base)

        return result

    # -------------------------------------------------------------------------
    # Анализ (исключение Гаусса)
    # -------------------------------------------------------------------------

    def determinant(self, *, eps: float = EPS_PIVOT) -> float:
        """
        Определитель методом Гаусса с частичным выбором ведущего элемента.

        Каждая перестановка строк меняет знак. Итог = знак × произведение
        диагонали после исключения.

        Args:
            eps: Порог вырожденности (default: EPS_PIVOT)

        Returns:
            Определитель; 0.0 если |pivot| < eps (не ошибка)

        Raises:
            DimensionMismatchError: Если матрица не квадратная

        Examples:
            >>> Matrix.from_rows([[1, 2], [3, 4]]).determinant()
            -2.0
        """
        self._require_square("Determinant")
        validate_eps(eps)

        a = self.to_list()
        n = self._rows
        sign = 1.0

        for k in range(n):
            pivot_row = _find_pivot(a, k, k)

            if is_negligible(a[pivot_row][k], eps):
                return 0.0

            if pivot_row != k:
                _swap_rows(a, k, pivot_row)
                sign = -sign

            row_k = a[k]
            pivot = row_k[k]

            for i in range(k + 1, n):
                row_i = a[i]
                factor = row_i[k] / pivot
                for j in range(k, n):
                    row_i[j] -= factor * row_k[j]

        det = sign
        for i in range(n):
            det *= a[i][i]

        return det

    def inverse(self, *, eps: float = EPS_PIVOT) -> "Matrix":
        """
        Обратная матрица методом Гаусса-Жордана на [A | I].

        Args:
            eps: Порог вырожденности (default: EPS_PIVOT)

        Returns:
            A⁻¹ (правая половина расширенной матрицы после исключения)

        Raises:
            DimensionMismatchError: Если матрица не квадратная
            SingularMatrixError: Если |pivot| < eps в каком-либо столбце
        """
        self._require_square("Inverse")
        validate_eps(eps)

        n = self._rows
        aug = [
            row[:] + [1.0 if j == i else 0.0 for j in range(n)]
            for i, row in enumerate(self._data)
        ]

        for col in range(n):
            pivot_row = _find_pivot(aug, col, col)

            if is_negligible(aug[pivot_row][col], eps):
                raise SingularMatrixError("Matrix is singular and has no inverse")

            if pivot_row != col:
                _swap_rows(aug, col, pivot_row)

            pivot = aug[col][col]
            pivot_values = [value / pivot for value in aug[col]]
            aug[col] = pivot_values

            for r in range(n):
                if r == col:
                    continue

                factor = aug[r][col]
                if is_negligible(factor, eps):
                    continue

                aug[r] = [
                    value - factor * pivot_value
                    for value, pivot_value in zip(aug[r], pivot_values)
                ]

        return Matrix._wrap([row[n:] for row in aug])

    def rank(self, *, eps: float = EPS_PIVOT) -> int:
        """
        Ранг через приведение к ступенчатому виду (row-echelon form).

        Столбец без ненулевого кандидата пропускается, курсор строки при
        этом не сдвигается. Пропущенный столбец повторно не просматривается.

        Args:
            eps: Порог вырожденности (default: EPS_PIVOT)

        Returns:
            Число независимых ведущих строк, 0 <= rank <= min(rows, columns)
        """
        validate_eps(eps)

        a = self.to_list()
        m, n = self._rows, self._columns
        rank = 0
        r = 0

        for c in range(n):
            if r >= m:
                break

            pivot_row = _find_pivot(a, c, r)
            if is_negligible(a[pivot_row][c], eps):
                continue

            if pivot_row != r:
                _swap_rows(a, r, pivot_row)

            row_r = a[r]
            diag = row_r[c]
            for j in range(c, n):
                row_r[j] /= diag

            for i in range(r + 1, m):
                row_i = a[i]
                factor = row_i[c]
                for j in range(c, n):
                    row_i[j] -= factor * row_r[j]

            r += 1
            rank += 1

        return rank

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: object) -> "Matrix":
        if isinstance(scalar, bool) or not isinstance(scalar, Real):
            return NotImplemented
        return self.multiply_scalar(float(scalar))

    __rmul__ = __mul__

    def __matmul__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __pow__(self, exponent: int) -> "Matrix":
        return self.power(exponent)

    def __neg__(self) -> "Matrix":
        return self.multiply_scalar(-1.0)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_value(value: float, precision: int = DISPLAY_PRECISION) -> str:
    """
    Общий числовой формат с precision значащими цифрами.

    Examples:
        >>> format_value(0.5)
        '0.5'
        >>> format_value(1234567.0)
        '1.23457e+06'
        >>> format_value(-2.0)
        '-2'
    """
    return format(value, f".{precision}g")


def format_matrix(matrix: Matrix, precision: int = DISPLAY_PRECISION) -> str:
    """
    Текстовое представление: строки через перевод строки, столбцы через табуляцию.

    Examples:
        >>> print(format_matrix(Matrix.identity(2)))
        1	0
        0	1
    """
    return ROW_SEPARATOR.join(
        COLUMN_SEPARATOR.join(format_value(value, precision) for value in row)
        for row in matrix.to_list()
    )
