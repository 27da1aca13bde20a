"""Utility functions for spreadsheet cell values."""
import math
import re
from typing import Optional

_CELL_RE = re.compile(r"^\s*[A-Za-z]+(\d+)\s*$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def calculate_range(start_cell: str, column: str, count: int) -> str:
    """
    Convert a cell reference and a row count to a single-column range.

    calculate_range("A71", "B", 6) -> "B71:B76". Returns "" when the
    reference has no row number.
    """
    m = _CELL_RE.match(start_cell or "")
    if not m:
        return ""
    start_row = int(m.group(1))
    end_row = start_row + count - 1
    return f"{column}{start_row}:{column}{end_row}"


def start_row(start_cell: str) -> Optional[int]:
    """Row number of an A1 cell reference, or None."""
    m = _CELL_RE.match(start_cell or "")
    return int(m.group(1)) if m else None


def parse_leading_int(s: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a cell ("3", "3 sets"), None if there is none."""
    if s is None:
        return None
    m = _LEADING_INT_RE.match(str(s))
    return int(m.group(1)) if m else None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _to_number(token: str) -> Optional[float]:
    try:
        value = float(token)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def average_reps(reps_str: Optional[str], diagnostics=None, row: Optional[int] = None) -> int:
    """
    Reduce a reps cell to one integer.

    "12" -> 12, "10,9,9" -> 9 (mean, rounded half up). Tokens that are not
    numbers are dropped; if nothing usable remains the result is 0.
    """
    if reps_str is None or str(reps_str).strip() == "":
        return 0

    text = str(reps_str).strip()

    if "," not in text:
        value = _to_number(text)
        if value is None or value < 0:
            if diagnostics is not None:
                diagnostics.record("reps", text, 0, "not a number", row=row)
            return 0
        return round_half_up(value)

    values = []
    dropped = []
    for token in text.split(","):
        token = token.strip()
        value = _to_number(token) if token else None
        if value is None or value < 0:
            dropped.append(token)
        else:
            values.append(value)

    if not values:
        if diagnostics is not None:
            diagnostics.record("reps", text, 0, "no numeric values", row=row)
        return 0

    mean = round_half_up(sum(values) / len(values))
    if dropped and diagnostics is not None:
        diagnostics.record(
            "reps", text, mean, f"ignored non-numeric values {dropped}", row=row
        )
    return mean
