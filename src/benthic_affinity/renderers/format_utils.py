"""Number formatting helpers for renderers.

Pure conversion functions with no external dependencies.
"""

from __future__ import annotations

import hashlib
import re

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9_.-]+")


def fmt_number(value: object, digits: int = 1) -> str:
    """Format a numeric cell, or an en dash for missing values."""
    if value is None or value == "":
        return "\u2013"
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return str(value)
    if number.is_integer() and digits == 0:
        return f"{int(number)}"
    return f"{number:.{digits}f}"


def fmt_pct(fraction: float | None) -> str:
    """Format a 0-1 fraction as a percentage."""
    if fraction is None:
        return "\u2013"
    return f"{fraction * 100:.1f}%"


def bar_width(fraction: float | None, max_px: int = 200) -> int:
    """Pixel width of a frequency bar."""
    if not fraction or fraction < 0:
        return 0
    return int(min(fraction, 1.0) * max_px)


def species_page_name(species_id: str) -> str:
    """File name of a species profile page, safe for any identifier.

    Identifiers that need rewriting get a short hash of the raw id appended,
    so "a/b" and "a_b" land on different pages.
    """
    safe = _UNSAFE_FILENAME.sub("_", species_id)
    if safe != species_id:
        digest = hashlib.sha1(species_id.encode("utf-8")).hexdigest()[:8]
        safe = f"{safe}-{digest}"
    return f"species_{safe}.html"


def as_float(value: object) -> float | None:
    """Coerce a table cell (float, int or CSV text) to float, None if empty."""
    if value is None or value == "":
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
