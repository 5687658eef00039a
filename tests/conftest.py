import pytest

from polycalc.builtins.functions import register_builtins
from polycalc.builtins.operators import MEMBER_ACCESS, create_domain, create_operators
from polycalc.builtins.printer import ValuePrinter
from polycalc.compiler.compilers import Compilers
from polycalc.factory import create_calculator
from polycalc.runtime.calculator import Calculator
from polycalc.runtime.environment import Environment

# Tests that accept the `notation` fixture run once per surface syntax.


@pytest.fixture(params=["infix", "prefix", "postfix"])
def notation(request):
    return request.param


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    # Results must not depend on the developer's shell
    for var in ("POLYCALC_NOTATION", "POLYCALC_PRINT_BASE", "POLYCALC_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def calc():
    return create_calculator(notation="infix", print_base=10)


@pytest.fixture
def domain(calc):
    return calc.compilers.domain


@pytest.fixture
def make_calculator():
    """Calculator over the default library plus extra globals: make_calculator(lambda env, domain: ...)."""

    def factory(extra=None, notation="infix"):
        domain = create_domain()
        operators = create_operators(domain)
        printer = ValuePrinter(10)
        env = Environment()
        register_builtins(env, domain, operators, printer)
        if extra is not None:
            extra(env, domain)
        compilers = Compilers(domain, operators, member_access_operator=MEMBER_ACCESS)
        return Calculator(env.freeze(), compilers, printer, default_notation=notation)

    return factory
