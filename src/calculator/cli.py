"""matcalc - интерфейс командной строки матричного калькулятора.

Тонкая обёртка над MatrixCalculator: разбирает аргументы, настраивает
logging и печатает результат (текст в stdout, отказ в stderr, либо
полный CalculationResult в JSON при --json).

Коды возврата:
- 0: успех (а также --help-format и вызов без операции)
- 1: операция завершилась отказом
- 2: ошибка аргументов (argparse)

Примеры:
    matcalc add -a "1 2; 3 4" -b "5 6; 7 8"
    matcalc determinant -a "[[1, 2], [3, 4]]"
    matcalc power -a "2 0; 0 2" --power -1
    matcalc rank -a "1 2 3; 4 5 6" --json
"""

import argparse
import logging
import sys
from typing import List, Optional

from src.calculator.calculator import CalculatorConfig, MatrixCalculator
from src.calculator.parser import PARSE_HINT
from src.core.domain import Operation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matcalc",
        description="Dense matrix calculator: arithmetic, determinant, inverse, rank",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=PARSE_HINT,
    )
    parser.add_argument(
        "operation",
        nargs="?",
        choices=[op.value for op in Operation],
        help="Operation to perform",
    )
    parser.add_argument("-a", "--matrix-a", help="Matrix A")
    parser.add_argument("-b", "--matrix-b", help="Matrix B (add, subtract, multiply)")
    parser.add_argument("--scalar", help="Scalar for scalar_multiply (default: 1)")
    parser.add_argument("--power", help="Integer exponent for power (default: 2)")
    parser.add_argument(
        "--eps",
        type=float,
        default=None,
        help="Pivot threshold for determinant, inverse, rank and power",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the full result as JSON"
    )
    parser.add_argument(
        "--help-format", action="store_true", help="Show the matrix input format"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Точка входа matcalc.

    Args:
        args: Аргументы командной строки (None → sys.argv[1:])

    Returns:
        Код возврата: 0 при успехе, 1 при отказе операции
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if parsed_args.help_format:
        print(PARSE_HINT)
        return 0

    if parsed_args.operation is None:
        parser.print_help()
        return 0

    try:
        config = (
            CalculatorConfig()
            if parsed_args.eps is None
            else CalculatorConfig(pivot_eps=parsed_args.eps)
        )
    except ValueError as e:
        parser.error(str(e))

    result = MatrixCalculator(config).evaluate(
        parsed_args.operation,
        parsed_args.matrix_a,
        matrix_b=parsed_args.matrix_b,
        scalar=parsed_args.scalar,
        power=parsed_args.power,
    )

    if parsed_args.json:
        print(result.model_dump_json(indent=2))
    elif result.ok:
        print(result.text)
    else:
        print(result.message, file=sys.stderr)

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
