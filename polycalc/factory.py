from __future__ import annotations

import logging
from typing import Optional

from polycalc.builtins.functions import register_builtins
from polycalc.builtins.operators import MEMBER_ACCESS, create_domain, create_operators
from polycalc.builtins.printer import ValuePrinter
from polycalc.compiler.compilers import Compilers
from polycalc.operators.dictionary import OperatorDictionary
from polycalc.runtime.calculator import Calculator
from polycalc.runtime.environment import Environment
from polycalc.types.domain import TypeDomain

logger = logging.getLogger(__name__)


def create_environment(domain: TypeDomain, operators: OperatorDictionary,
                       printer: ValuePrinter) -> Environment:
    env = Environment()
    register_builtins(env, domain, operators, printer)
    return env.freeze()


def create_calculator(notation: Optional[str] = None, print_base: Optional[int] = None) -> Calculator:
    """Calculator over the default domain, operators and builtin library.

    `notation` and `print_base` default to POLYCALC_NOTATION and
    POLYCALC_PRINT_BASE.
    """
    domain = create_domain()
    operators = create_operators(domain)
    printer = ValuePrinter(print_base)
    environment = create_environment(domain, operators, printer)
    compilers = Compilers(domain, operators, member_access_operator=MEMBER_ACCESS)
    calculator = Calculator(environment, compilers, printer, default_notation=notation)
    logger.debug(
        "created calculator: notation=%s, base=%d, %d symbols",
        calculator.default_notation.value, printer.base, len(environment.symbols),
    )
    return calculator
