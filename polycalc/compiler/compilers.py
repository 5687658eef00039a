from __future__ import annotations

import enum
import logging
from typing import Iterable, Optional, Sequence, Union

from polycalc.compiler.executable import Executable, Step
from polycalc.compiler.front_end import FrontEnd
from polycalc.compiler.infix import InfixParser
from polycalc.compiler.nodes import ExprNode, ExprNodeFactory
from polycalc.compiler.postfix import PostfixCompiler
from polycalc.compiler.prefix import PrefixParser
from polycalc.compiler.quoting import Quoter
from polycalc.compiler.stream import TokenStream
from polycalc.errors import ParseError
from polycalc.operators.dictionary import OperatorDictionary
from polycalc.reader.tokenizer import MODIFIER_QUOTE, Token, Tokenizer
from polycalc.reader.value_parser import TypedValueParser
from polycalc.types.domain import TypeDomain

logger = logging.getLogger(__name__)


class Notation(enum.Enum):
    INFIX = "infix"
    PREFIX = "prefix"
    POSTFIX = "postfix"

    @classmethod
    def parse(cls, value: Union[str, Notation]) -> Notation:
        if isinstance(value, Notation):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(n.value for n in cls)
            raise ValueError(f"Unknown notation {value!r}, expected one of: {names}") from None


class Compilers:
    """Owns one front-end per notation and lets them hand groups to each other.

    `infix(...)`, `prefix(...)` and `postfix(...)` inside any notation compile
    the bracketed tokens with the named front-end and splice the result in.
    """

    def __init__(
        self,
        domain: TypeDomain,
        operators: OperatorDictionary,
        member_access_operator: Optional[str] = None,
        modifiers: Iterable[str] = (MODIFIER_QUOTE,),
    ):
        self.domain = domain
        self.operators = operators
        self.tokenizer = Tokenizer(operators.all_operators(), modifiers)
        self.value_parser = TypedValueParser(domain)
        self.node_factory = ExprNodeFactory(domain, member_access_operator)
        self.quoter = Quoter(domain, self.value_parser)
        self.front_ends: dict[Notation, FrontEnd] = {
            Notation.INFIX: InfixParser(self),
            Notation.PREFIX: PrefixParser(self),
            Notation.POSTFIX: PostfixCompiler(self),
        }

    def is_notation(self, name: str) -> bool:
        return any(name == n.value for n in self.front_ends)

    def front_end(self, notation: Union[str, Notation]) -> FrontEnd:
        return self.front_ends[Notation.parse(notation)]

    def compile(self, source: str, notation: Union[str, Notation]) -> Executable:
        front_end = self.front_end(notation)
        try:
            steps = front_end.compile_steps(TokenStream(self.tokenizer.tokenize(source)))
        except RecursionError:
            raise ParseError("Expression nested too deeply") from None
        executable = Executable(tuple(steps))
        logger.debug("compiled %s %r into %d steps", front_end.notation, source, len(executable))
        return executable

    def parse_group(self, notation: str, tokens: Sequence[Token]) -> ExprNode:
        return self.front_end(notation).parse_node(TokenStream(tokens))

    def compile_group(self, notation: str, tokens: Sequence[Token]) -> list[Step]:
        return self.front_end(notation).compile_steps(TokenStream(tokens))
