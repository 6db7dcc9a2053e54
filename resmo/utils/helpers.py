"""Helper utilities for the Resmo dashboard."""

import asyncio
import json
import re
from datetime import datetime, timezone
from typing import Any, Awaitable, Optional, TypeVar

T = TypeVar("T")


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (audit log timestamps)."""
    return datetime.now(timezone.utc).isoformat()


def normalize_email(email: str) -> str:
    """Lower-case and strip an email for identity comparisons."""
    return (email or "").strip().lower()


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```) if present."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    return raw


def parse_llm_json(text: str) -> Optional[Any]:
    """Parse JSON from LLM response, stripping markdown code blocks if present."""
    try:
        return json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        return None


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` with a visible marker."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "\n\n[Content truncated.]"


def run_sync(coro: Awaitable[T]) -> T:
    """
    Run a coroutine to completion from sync code (e.g. Streamlit callbacks).
    A fresh loop per call; the loop is always closed.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()
