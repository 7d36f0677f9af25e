from __future__ import annotations
import logging
import os
from pathlib import Path


# Resolve installation dir (mal package directory)
_MAL_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MAL_DIR / 'prelude'
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_RECURSION_LIMIT = 10_000

PRELUDE_FILE = 'core.mal'


def get_prelude_root() -> Path:
    raw = os.environ.get('MAL_PRELUDE_PATH')
    p = Path(raw.strip()) if raw and raw.strip() else _DEFAULT_PRELUDE_DIR
    # treat as single directory; if a file path is set, return its parent
    return p if p.is_dir() else p.parent


def get_log_level() -> int:
    name = os.environ.get('MAL_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> int:
    raw = os.environ.get('MAL_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return int(raw)
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT
