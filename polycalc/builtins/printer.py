from __future__ import annotations

import math
from typing import Optional

from polycalc import config
from polycalc.types.composite import Composite
from polycalc.types.cons import Cons
from polycalc.types.symbol import Symbol
from polycalc.types.unit import UnitType
from polycalc.types.value import TypedValue

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}


# Digits produced per divmod step; keeps huge ints clear of int->str limits
CHUNK_DIGITS = 16


def int_digits(value: int, base: int) -> str:
    """Digits of a non-negative int in `base`, most significant first."""
    chunk = base ** CHUNK_DIGITS
    parts = []
    while True:
        value, part = divmod(value, chunk)
        parts.append(part)
        if value == 0:
            break

    out = []
    for part in reversed(parts):
        group = []
        for _ in range(CHUNK_DIGITS):
            part, digit = divmod(part, base)
            group.append(DIGITS[digit])
        out.append("".join(reversed(group)))
    return "".join(out).lstrip("0") or "0"


def format_int(value: int, base: int) -> str:
    """`base#digits` for any base other than 10, readable back by the tokenizer."""
    sign = "-" if value < 0 else ""
    digits = int_digits(abs(value), base)
    if base == 10:
        return sign + digits
    return f"{sign}{base}#{digits}"


def format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def format_complex(value: complex) -> str:
    real = format_float(value.real)
    if math.isnan(value.imag) or value.imag >= 0:
        return f"{real}+{format_float(value.imag)}I"
    return f"{real}-{format_float(-value.imag)}I"


def format_str(value: str) -> str:
    return '"' + "".join(_STRING_ESCAPES.get(c, c) for c in value) + '"'


class ValuePrinter:
    def __init__(self, base: Optional[int] = None):
        self.base = config.get_print_base() if base is None else base
        if not 2 <= self.base <= 36:
            raise ValueError(f"Print base must be between 2 and 36, got {self.base}")

    def repr(self, value: TypedValue) -> str:
        return self._format(value, nested=False)

    def to_string(self, value: TypedValue) -> str:
        """Like repr, but strings and symbols come out bare."""
        if value.type is str:
            return value.value
        if value.type is Symbol:
            return value.value.id
        return self.repr(value)

    def _format(self, value: TypedValue, nested: bool) -> str:
        tag, payload = value.type, value.value
        if tag is UnitType:
            return "null"
        if tag is bool:
            return "true" if payload else "false"
        if tag is int:
            return format_int(payload, self.base)
        if tag is float:
            return format_float(payload)
        if tag is complex:
            return format_complex(payload)
        if tag is str:
            return format_str(payload)
        if tag is Symbol:
            return payload.id if nested else f"'{payload.id}"
        if tag is Cons:
            return self._format_cons(payload)
        if tag is Composite:
            return f"<{payload.type_name()}>"
        return repr(payload)

    def _format_cons(self, cons: Cons) -> str:
        items = [self._format(item, nested=True) for item in cons]
        tail = cons.last_cdr()
        if tail.type is not UnitType:
            items.append(".")
            items.append(self._format(tail, nested=True))
        return "(" + " ".join(items) + ")"
