from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from polycalc import config
from polycalc.compiler.compilers import Notation
from polycalc.errors import PolycalcError, cause_chain
from polycalc.factory import create_calculator
from polycalc.runtime.calculator import CalculatorState


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="polycalc", description="Interactive expression calculator")
    parser.add_argument(
        "--notation",
        choices=[n.value for n in Notation],
        default=None,
        help="input notation (default: $POLYCALC_NOTATION or infix)",
    )
    parser.add_argument("--base", type=int, default=None, help="integer output base, 2..36")
    parser.add_argument("expression", nargs="*", help="evaluate and exit instead of starting a prompt")
    return parser


def evaluate_line(calculator, line: str) -> str:
    try:
        return calculator.compile_execute_and_print(line)
    except PolycalcError as e:
        if calculator.state is CalculatorState.FAULTED:
            calculator.reset()
        return "\n".join(("error: " if i == 0 else "  caused by: ") + msg
                         for i, msg in enumerate(cause_chain(e)))


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.get_log_level())

    calculator = create_calculator(notation=args.notation, print_base=args.base)

    if args.expression:
        print(evaluate_line(calculator, " ".join(args.expression)))
        return 0

    prompt = f"{calculator.default_notation.value}> "
    while True:
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if not line.strip():
            continue
        print(evaluate_line(calculator, line))


if __name__ == "__main__":
    sys.exit(main())
