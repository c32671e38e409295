"""
Тесты для Matrix - построение, доступ, арифметика, форматирование

Проверяемые инварианты:
1. rows >= 1, columns >= 1, размеры неизменны
2. Построение из данных копирует хранилище (нет алиасинга)
3. Операции возвращают новую матрицу и не изменяют операнды
4. Нарушение размеров → DimensionMismatchError
5. Текстовый вывод: строки через '\\n', столбцы через '\\t'
"""

import pytest

from src.core.math import (
    DimensionMismatchError,
    ErrorKind,
    InvalidArgumentError,
    InvalidMatrixFormatError,
    Matrix,
    MatrixError,
    SingularMatrixError,
    format_matrix,
    format_value,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def a() -> Matrix:
    return Matrix.from_rows([[1, 2], [3, 4]])


@pytest.fixture
def b() -> Matrix:
    return Matrix.from_rows([[5, 6], [7, 8]])


@pytest.fixture
def rect() -> Matrix:
    """Прямоугольная матрица 2×3."""
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]])


# =============================================================================
# ТЕСТЫ: Error Taxonomy
# =============================================================================


class TestErrorTaxonomy:
    """Тесты иерархии ошибок и ErrorKind."""

    def test_kinds(self):
        """Каждый класс ошибки несёт свой ErrorKind."""
        assert InvalidArgumentError.kind == ErrorKind.INVALID_ARGUMENT
        assert InvalidMatrixFormatError.kind == ErrorKind.INVALID_FORMAT
        assert DimensionMismatchError.kind == ErrorKind.DIMENSION_MISMATCH
        assert SingularMatrixError.kind == ErrorKind.SINGULAR_MATRIX

    def test_common_base(self):
        """Все ошибки ловятся через MatrixError."""
        for cls in (
            InvalidArgumentError,
            InvalidMatrixFormatError,
            DimensionMismatchError,
            SingularMatrixError,
        ):
            assert issubclass(cls, MatrixError)

    def test_builtin_bases(self):
        """Совместимость со встроенными исключениями Python."""
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(InvalidMatrixFormatError, ValueError)
        assert issubclass(DimensionMismatchError, ValueError)
        assert issubclass(SingularMatrixError, ArithmeticError)


# =============================================================================
# ТЕСТЫ: Построение
# =============================================================================


class TestConstruction:
    """Тесты конструкторов Matrix."""

    def test_zero_filled(self):
        """Matrix(rows, columns) заполнена нулями."""
        m = Matrix(2, 3)
        assert m.rows == 2
        assert m.columns == 3
        assert m.shape == (2, 3)
        assert m.to_list() == [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]

    @pytest.mark.parametrize("rows, columns", [(0, 1), (1, 0), (-1, 2), (0, 0)])
    def test_non_positive_dimensions_rejected(self, rows, columns):
        """Неположительные размеры → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="must be positive"):
            Matrix(rows, columns)

    def test_non_integer_dimensions_rejected(self):
        """Нецелые размеры → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="must be an integer"):
            Matrix(2.5, 2)
        with pytest.raises(InvalidArgumentError, match="must be an integer"):
            Matrix(True, 2)

    def test_from_rows(self):
        """from_rows задаёт размеры по числу строк и длине строки."""
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        assert m.shape == (2, 3)
        assert m[1, 2] == 6.0
        assert isinstance(m[0, 0], float)

    def test_from_rows_accepts_tuples_and_generators(self):
        """Строки могут быть любыми итерируемыми."""
        m = Matrix.from_rows(((i, i + 1) for i in range(3)))
        assert m.to_list() == [[0.0, 1.0], [1.0, 2.0], [2.0, 3.0]]

    def test_from_rows_empty(self):
        """Пустой ввод → InvalidMatrixFormatError."""
        with pytest.raises(InvalidMatrixFormatError, match="at least one row"):
            Matrix.from_rows([])
        with pytest.raises(InvalidMatrixFormatError, match="at least one row"):
            Matrix.from_rows(None)

    def test_from_rows_empty_row(self):
        """Пустая строка → InvalidMatrixFormatError."""
        with pytest.raises(InvalidMatrixFormatError, match="must not be empty"):
            Matrix.from_rows([[]])

    def test_from_rows_ragged(self):
        """Строки разной длины → InvalidMatrixFormatError."""
        with pytest.raises(InvalidMatrixFormatError, match="different lengths"):
            Matrix.from_rows([[1, 2], [3]])

    def test_from_rows_non_numeric(self):
        """Нечисловое значение → InvalidMatrixFormatError."""
        with pytest.raises(InvalidMatrixFormatError, match="non-numeric"):
            Matrix.from_rows([[1, "x"]])

    def test_from_rows_int_out_of_float_range(self):
        """Целое вне диапазона float → InvalidMatrixFormatError, не OverflowError."""
        with pytest.raises(
            InvalidMatrixFormatError, match="Row 2 contains a non-numeric"
        ):
            Matrix.from_rows([[1], [10**400]])

    @pytest.mark.parametrize("row", ["12", b"12"])
    def test_from_rows_text_row_rejected(self, row):
        """Строка-текст не разбирается посимвольно."""
        with pytest.raises(
            InvalidMatrixFormatError, match="must be a sequence of numbers"
        ):
            Matrix.from_rows([row])

    def test_from_data_generator(self):
        """from_data принимает генератор строк."""
        m = Matrix.from_data([i, i * 2] for i in range(1, 3))
        assert m.to_list() == [[1.0, 2.0], [2.0, 4.0]]

    def test_from_data_empty_generator(self):
        """Пустой генератор → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="must not be empty"):
            Matrix.from_data(row for row in [])

    def test_from_data_not_iterable(self):
        """Неитерируемые данные → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="iterable of rows"):
            Matrix.from_data(42)

    def test_from_data_copies(self):
        """from_data не разделяет хранилище с исходными данными."""
        data = [[1.0, 2.0], [3.0, 4.0]]
        m = Matrix.from_data(data)
        data[0][0] = 100.0
        assert m[0, 0] == 1.0

    def test_from_data_matrix_copies(self, a):
        """from_data(Matrix) возвращает независимую копию."""
        m = Matrix.from_data(a)
        m[0, 0] = 100.0
        assert a[0, 0] == 1.0

    def test_from_data_absent(self):
        """Отсутствующие или пустые данные → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="must not be None"):
            Matrix.from_data(None)
        with pytest.raises(InvalidArgumentError, match="must not be empty"):
            Matrix.from_data([])

    def test_identity(self):
        """Единичная матрица: 1 на диагонали, 0 вне её."""
        assert Matrix.identity(3).to_list() == [
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ]

    def test_identity_invalid_size(self):
        """identity(0) → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            Matrix.identity(0)


# =============================================================================
# ТЕСТЫ: Доступ и копирование
# =============================================================================


class TestAccess:
    """Тесты индексатора, clone и сравнения."""

    def test_get_set(self):
        """Запись и чтение через индексатор."""
        m = Matrix(2, 2)
        m[1, 0] = 7
        assert m[1, 0] == 7.0
        assert m.to_list() == [[0.0, 0.0], [7.0, 0.0]]

    @pytest.mark.parametrize("key", [(2, 0), (0, 2), (-1, 0), (0, -1)])
    def test_out_of_range(self, key):
        """Индекс вне диапазона (в том числе отрицательный) → IndexError."""
        m = Matrix(2, 2)
        with pytest.raises(IndexError):
            m[key]
        with pytest.raises(IndexError):
            m[key] = 1.0

    def test_dimensions_read_only(self, a):
        """Размеры нельзя изменить после построения."""
        with pytest.raises(AttributeError):
            a.rows = 5

    def test_clone_is_independent(self, a):
        """clone возвращает глубокую копию."""
        c = a.clone()
        assert c == a
        c[0, 0] = 42.0
        assert a[0, 0] == 1.0

    def test_to_list_is_copy(self, a):
        """Изменение to_list() не влияет на матрицу."""
        values = a.to_list()
        values[0][0] = 42.0
        assert a[0, 0] == 1.0

    def test_equality(self, a):
        """Равенство по размеру и значениям."""
        assert a == Matrix.from_rows([[1, 2], [3, 4]])
        assert a != Matrix.from_rows([[1, 2], [3, 5]])
        assert Matrix(1, 2) != Matrix(2, 1)
        assert a != [[1, 2], [3, 4]]

    def test_not_hashable(self, a):
        """Изменяемая матрица не хэшируется."""
        with pytest.raises(TypeError):
            hash(a)

    def test_allclose(self, a):
        """allclose учитывает толерантность и размеры."""
        nudged = a.clone()
        nudged[0, 0] += 1e-12
        assert a.allclose(nudged)
        assert not a.allclose(Matrix.from_rows([[1, 2], [3, 4.1]]))
        assert not a.allclose(Matrix(2, 3))


# =============================================================================
# ТЕСТЫ: Поэлементная арифметика
# =============================================================================


class TestElementwise:
    """Тесты add / subtract / multiply_scalar."""

    def test_add(self, a, b):
        """Поэлементная сумма."""
        assert a.add(b).to_list() == [[6.0, 8.0], [10.0, 12.0]]

    def test_add_commutative(self, a, b):
        """A + B == B + A."""
        assert a.add(b) == b.add(a)

    def test_subtract(self, a, b):
        """Поэлементная разность."""
        assert b.subtract(a).to_list() == [[4.0, 4.0], [4.0, 4.0]]

    def test_operands_untouched(self, a, b):
        """Операнды не изменяются, результат - новый объект."""
        result = a.add(b)
        assert result is not a and result is not b
        assert a.to_list() == [[1.0, 2.0], [3.0, 4.0]]
        assert b.to_list() == [[5.0, 6.0], [7.0, 8.0]]

    def test_add_dimension_mismatch(self):
        """Matrix(2,3) + Matrix(3,2) → DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError, match="same size"):
            Matrix(2, 3).add(Matrix(3, 2))

    def test_subtract_dimension_mismatch(self):
        """Разность матриц разного размера → DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError, match="same size"):
            Matrix(2, 2).subtract(Matrix(2, 3))

    def test_non_matrix_operand(self, a):
        """Операнд не Matrix → InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="must be a Matrix"):
            a.add(None)

    def test_multiply_scalar(self, a):
        """Умножение на скаляр."""
        assert a.multiply_scalar(2.5).to_list() == [[2.5, 5.0], [7.5, 10.0]]
        assert a.multiply_scalar(0).to_list() == [[0.0, 0.0], [0.0, 0.0]]


# =============================================================================
# ТЕСТЫ: Умножение и транспонирование
# =============================================================================


class TestMultiplyTranspose:
    """Тесты multiply / transpose."""

    def test_multiply(self, a, b):
        """Стандартное матричное произведение."""
        assert a.multiply(b).to_list() == [[19.0, 22.0], [43.0, 50.0]]

    def test_multiply_rectangular(self, rect):
        """(2×3)·(3×2) → 2×2."""
        result = rect.multiply(rect.transpose())
        assert result.shape == (2, 2)
        assert result.to_list() == [[14.0, 32.0], [32.0, 77.0]]

    def test_multiply_dimension_mismatch(self, rect):
        """A.columns != B.rows → DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError, match="must equal number of rows"):
            rect.multiply(rect)

    def test_multiply_identity(self, rect):
        """A·I == A."""
        assert rect.multiply(Matrix.identity(rect.columns)) == rect
        assert Matrix.identity(rect.rows).multiply(rect) == rect

    def test_associativity(self):
        """(A·B)·C ≈ A·(B·C)."""
        x = Matrix.from_rows([[1.5, -2.0], [0.25, 3.0], [4.0, 1.0]])
        y = Matrix.from_rows([[2.0, 0.5, -1.0], [1.0, 1.0, 3.5]])
        z = Matrix.from_rows([[0.1], [-2.0], [7.0]])
        assert x.multiply(y).multiply(z).allclose(x.multiply(y.multiply(z)))

    def test_transpose(self, rect):
        """R[j,i] = A[i,j]."""
        t = rect.transpose()
        assert t.shape == (3, 2)
        assert t.to_list() == [[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]]

    def test_double_transpose(self, rect):
        """(Aᵀ)ᵀ == A."""
        assert rect.transpose().transpose() == rect

    def test_transpose_single_element(self):
        """1×1 транспонируется в себя."""
        m = Matrix.from_rows([[3.0]])
        assert m.transpose() == m


# =============================================================================
# ТЕСТЫ: Операторы
# =============================================================================


class TestOperators:
    """Тесты операторов +, -, *, @, **, унарный минус."""

    def test_operators(self, a, b):
        """Операторы совпадают с именованными методами."""
        assert a + b == a.add(b)
        assert a - b == a.subtract(b)
        assert a * 3 == a.multiply_scalar(3)
        assert 3 * a == a.multiply_scalar(3)
        assert a @ b == a.multiply(b)
        assert a ** 2 == a.power(2)
        assert -a == a.multiply_scalar(-1)

    def test_unsupported_operands(self, a):
        """Несовместимые типы → TypeError."""
        with pytest.raises(TypeError):
            a + 1
        with pytest.raises(TypeError):
            a * "2"
        with pytest.raises(TypeError):
            a @ 2


# =============================================================================
# ТЕСТЫ: Форматирование
# =============================================================================


class TestFormatting:
    """Тесты текстового представления."""

    def test_str(self):
        """Столбцы через табуляцию, строки через перевод строки."""
        m = Matrix.from_rows([[1, 2.5], [-3, 0]])
        assert str(m) == "1\t2.5\n-3\t0"

    def test_six_significant_digits(self):
        """Шесть значащих цифр, экспоненциальная запись для больших чисел."""
        assert format_value(1.0 / 3.0) == "0.333333"
        assert format_value(1234567.0) == "1.23457e+06"
        assert format_value(1e-7) == "1e-07"

    def test_custom_precision(self):
        """Точность вывода настраивается."""
        m = Matrix.from_rows([[2.0 / 3.0]])
        assert format_matrix(m, precision=3) == "0.667"

    def test_repr(self, a):
        """repr пригоден для воспроизведения."""
        assert repr(a) == "Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])"
