"""Field-level parsers for loosely typed broker export values.

Every function here is pure. Dates accept exactly two layouts, ISO-like
``YYYY-MM-DD`` (optionally followed by a time) and US ``MM/DD/YYYY``.
Currency and quantity parsing never raise; unparseable input becomes 0.
"""
import math
import numbers
import re
from datetime import date, datetime
from typing import Any

import pandas as pd
from dateutil import parser as dtparser

from .exceptions import RowNormalizationError

_CURRENCY_STRIP = re.compile(r"[$,\s]")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, float) and math.isnan(val):
        return True
    if isinstance(val, str) and not val.strip():
        return True
    return False


def _to_naive(ts: pd.Timestamp) -> pd.Timestamp:
    # Offsets are folded into UTC so aware and naive values stay comparable.
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def parse_date(val: Any) -> pd.Timestamp:
    """
    Parses a close/open date field.

    Empty input yields the current instant. Strings containing ``-`` are read
    as ISO dates, strings with three ``/`` separated parts as MM/DD/YYYY.
    Anything else raises RowNormalizationError.
    """
    if _is_missing(val):
        return pd.Timestamp.now()

    if isinstance(val, (datetime, date)):
        return _to_naive(pd.Timestamp(val))

    s = str(val).strip()

    if "-" in s:
        try:
            return _to_naive(pd.Timestamp(dtparser.isoparse(s)))
        except (ValueError, OverflowError) as e:
            raise RowNormalizationError(f"Invalid ISO date '{s}': {e}") from e

    parts = s.split("/")
    if len(parts) == 3 and all(p.strip() for p in parts):
        month, day, year = (p.strip() for p in parts)
        try:
            return pd.Timestamp(year=int(year), month=int(month), day=int(day))
        except (ValueError, OverflowError) as e:
            raise RowNormalizationError(f"Invalid MM/DD/YYYY date '{s}': {e}") from e

    raise RowNormalizationError(f"Unrecognized date format '{s}'")


def parse_currency(val: Any) -> float:
    """Parses '$-1,234.50' style amounts. Parenthesized amounts are negative."""
    if isinstance(val, bool):
        return 0.0
    if isinstance(val, numbers.Real):
        return val if math.isfinite(val) else 0.0
    if _is_missing(val):
        return 0.0

    clean = _CURRENCY_STRIP.sub("", str(val))
    if clean.startswith("(") and clean.endswith(")"):
        clean = "-" + clean[1:-1]

    try:
        amount = float(clean)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def parse_quantity(val: Any) -> int:
    """Leading-integer parse, so '12.7' is 12 and '3 shares' is 3."""
    if isinstance(val, bool):
        return 0
    if isinstance(val, numbers.Real):
        return int(val) if math.isfinite(val) else 0
    if _is_missing(val):
        return 0

    match = _LEADING_INT.match(str(val))
    if not match:
        return 0
    return int(match.group(1))
