"""Lenient parsers for the free-text values found in BOE tables.

These helpers never raise: the registry is full of irregular text ("Sin
puja mínima", "Sin tramos", blank dates) and every irregularity has a
documented default. Unusual input is logged at WARNING level instead.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal

from boewatch.infrastructure.observability.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_DATE = date(2000, 1, 1)
DEFAULT_TEXT = "NA"
CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

_MULTISPACE_RE = re.compile(r" {2,}")


def _first_token(text: str) -> str:
    stripped = text.strip()
    return stripped.split(" ", 1)[0] if stripped else ""


def parse_money(text: str | None) -> Decimal:
    """Parse an amount such as ``"81.971,57 €"`` into ``Decimal("81971.57")``.

    Only the text before the first space is considered; thousands dots and
    the decimal comma are dropped and the remaining digits are read as cents.
    Missing or non-numeric text yields ``0.00``.
    """
    if text is None:
        return ZERO
    digits = _first_token(text).replace(".", "").replace(",", "")
    if not digits.isdecimal():
        if digits:
            LOGGER.debug("Non numeric amount %r, using 0.00", text)
        return ZERO
    return (Decimal(int(digits)) / 100).quantize(CENTS)


def format_money(amount: Decimal) -> str:
    """Canonical text form used for storage: plain digits, two decimals."""
    return str(amount.quantize(CENTS))


def parse_date(text: str | None) -> date:
    """Parse ``"14-07-2020 18:00:00 CET ..."`` into ``date(2020, 7, 14)``."""
    if text is None:
        return DEFAULT_DATE
    token = _first_token(text)
    try:
        return datetime.strptime(token, "%d-%m-%Y").date()
    except ValueError:
        LOGGER.warning("Unable to parse date %r, using %s", text, DEFAULT_DATE)
        return DEFAULT_DATE


def parse_vehicle_date(text: str | None) -> date:
    """Parse a license date in either ``YYYY-MM-DD`` or ``DD-MM-YYYY`` form.

    Slashes are accepted as separators too.
    """
    if text is None:
        return DEFAULT_DATE
    token = _first_token(text).replace("/", "-")
    for fmt in ("%Y-%m-%d", "%d-%m-%Y"):
        try:
            return datetime.strptime(token, fmt).date()
        except ValueError:
            continue
    LOGGER.warning("Unable to parse licensed date %r, using %s", text, DEFAULT_DATE)
    return DEFAULT_DATE


def parse_int(text: str | None, default: int = 0) -> int:
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        return default


def clean_text(text: str | None) -> str:
    """Put a space after every comma and period and squeeze repeated spaces."""
    if text is None:
        return DEFAULT_TEXT
    spaced = text.replace(",", ", ").replace(".", ". ")
    return _MULTISPACE_RE.sub(" ", spaced).strip()


def text_or_default(text: str | None) -> str:
    if text is None:
        return DEFAULT_TEXT
    return text


__all__ = [
    "CENTS",
    "DEFAULT_DATE",
    "DEFAULT_TEXT",
    "ZERO",
    "clean_text",
    "format_money",
    "parse_date",
    "parse_int",
    "parse_money",
    "parse_vehicle_date",
    "text_or_default",
]
