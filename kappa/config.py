from __future__ import annotations
import os


# Defaults
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PRINT_WIDTH = 80

_LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_recursion_limit() -> int:
    return int_from_env('KAPPA_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_print_width() -> int:
    return int_from_env('KAPPA_PRINT_WIDTH', _DEFAULT_PRINT_WIDTH)


def get_log_level() -> str:
    raw = os.environ.get('KAPPA_LOG_LEVEL', '').strip().upper()
    return raw if raw in _LOG_LEVELS else _DEFAULT_LOG_LEVEL
