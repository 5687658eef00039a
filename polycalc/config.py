from __future__ import annotations
import os


_DEFAULT_NOTATION = 'infix'
_DEFAULT_PRINT_BASE = 10
_DEFAULT_LOG_LEVEL = 'WARNING'


def value_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return raw.strip()


def get_default_notation() -> str:
    return value_from_env('POLYCALC_NOTATION', _DEFAULT_NOTATION).lower()


def get_print_base() -> int:
    raw = value_from_env('POLYCALC_PRINT_BASE', str(_DEFAULT_PRINT_BASE))
    try:
        base = int(raw)
    except ValueError:
        raise ValueError(f"POLYCALC_PRINT_BASE must be an integer, got {raw!r}") from None
    if not 2 <= base <= 36:
        raise ValueError(f"POLYCALC_PRINT_BASE must be between 2 and 36, got {base}")
    return base


def get_log_level() -> str:
    return value_from_env('POLYCALC_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
