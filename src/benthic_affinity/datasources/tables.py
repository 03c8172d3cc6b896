"""Shared CSV reading for the prepared input tables."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence
    from pathlib import Path

# Cell values treated as "no value" in every input table
MISSING_TOKENS = frozenset({"", "NA", "N/A", "NaN", "nan", "NULL", "null", "None"})

_TRUE_TOKENS = frozenset({"true", "t", "yes", "y", "1"})
_FALSE_TOKENS = frozenset({"false", "f", "no", "n", "0"})


def read_table(path: Path, required: Sequence[str]) -> pd.DataFrame:
    """Read a CSV table as text cells, with missing values as None.

    Every cell is read as a string and stripped; cells matching
    ``MISSING_TOKENS`` become None. Row ``i`` of the frame sits on file line
    ``i + 2`` (see ``row_location``).

    Raises:
        ValueError: If the header is missing any of the ``required`` columns.
    """
    frame = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8-sig",
    )
    frame.columns = [str(name).strip() for name in frame.columns]
    missing = [col for col in required if col not in frame.columns]
    if missing:
        msg = f"{path}: missing required column(s): {', '.join(missing)}"
        raise ValueError(msg)

    if frame.empty:
        return frame.astype(object)
    frame = frame.apply(lambda column: column.str.strip())
    frame = frame.mask(frame.isin(list(MISSING_TOKENS)))
    return frame.astype(object).where(frame.notna(), None)


def row_location(path: Path, index: Hashable) -> str:
    """``file:line`` of a frame row, counting the header as line 1."""
    return f"{path}:{int(index) + 2}"  # type: ignore[call-overload]


def numeric_column(frame: pd.DataFrame, column: str, path: Path) -> pd.Series:
    """Convert one text column to floats, NaN where the cell is missing.

    Raises:
        ValueError: On the first cell that is present but not a finite number,
            naming the file line.
    """
    raw = frame[column]
    values = pd.to_numeric(raw, errors="coerce")

    malformed = raw.notna() & values.isna()
    if malformed.any():
        index = malformed.idxmax()
        msg = (
            f"{row_location(path, index)}: column {column!r} has non-numeric value "
            f"{raw[index]!r}"
        )
        raise ValueError(msg)

    infinite = values.isin([math.inf, -math.inf])
    if infinite.any():
        index = infinite.idxmax()
        msg = (
            f"{row_location(path, index)}: column {column!r} has non-finite value "
            f"{raw[index]!r}"
        )
        raise ValueError(msg)

    return values.astype(float)


def parse_flag(raw: str | None, *, column: str, where: str) -> bool | None:
    """Parse a boolean flag cell (true/false, yes/no, 1/0), None if missing.

    Raises:
        ValueError: If the cell is present but not a recognized flag.
    """
    if raw is None:
        return None
    token = raw.lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    msg = f"{where}: column {column!r} has non-boolean value {raw!r}"
    raise ValueError(msg)
