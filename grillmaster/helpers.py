"""Small shared helpers: ids, timestamps, number coercion and money formatting."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from uuid import uuid4

from grillmaster.config import CURRENCY_SYMBOL


def generate_id(prefix: str = "") -> str:
    """Return a fresh opaque id, optionally prefixed."""
    new_id = uuid4().hex[:12]
    return f"{prefix}-{new_id}" if prefix else new_id


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_number(value: object) -> float | None:
    """Parse ``value`` as a finite float, or return None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def to_number(value: object, default: float = 0.0) -> float:
    """Coerce loosely-typed input (form text, None) to a number; junk becomes ``default``."""
    number = parse_number(value)
    return default if number is None else number


def clean_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def format_currency(amount: object) -> str:
    """Format an amount as ``Rs. 1,234.50``; non-numeric input shows as zero."""
    return f"{CURRENCY_SYMBOL} {to_number(amount):,.2f}"
