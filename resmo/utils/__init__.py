"""Utility exports."""

from .helpers import (
    normalize_email,
    parse_llm_json,
    run_sync,
    strip_code_fences,
    truncate,
    utc_now_iso,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "normalize_email",
    "parse_llm_json",
    "run_sync",
    "strip_code_fences",
    "truncate",
    "utc_now_iso",
]
