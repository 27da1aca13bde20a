"""
Date normalization for spreadsheet date cells.

Sheet dates are typed by hand and come in several shapes ("2025-03-24",
"3/24", "3/24/2025", "March 24"). Everything is normalized to YYYY-MM-DD.
Dates without a year get the configured campaign year.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_DAY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})$")
MONTH_DAY_YEAR_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

# Year dateutil fills in when the text has none; rewritten to the campaign year
SENTINEL_YEAR = 2001
_PARSER_DEFAULT = datetime(SENTINEL_YEAR, 1, 1)


def normalize_sheet_date(date_str: str, year: int, diagnostics=None) -> str:
    """
    Normalize a raw sheet date to YYYY-MM-DD.

    Args:
        date_str: Raw cell value
        year: Year applied to dates written without one
        diagnostics: Optional ParseDiagnostics collecting unparseable values

    Returns:
        The normalized date, or the raw value unchanged if it cannot be parsed
    """
    raw = "" if date_str is None else str(date_str)
    text = raw.strip()

    if ISO_DATE_PATTERN.match(text):
        return text

    m = MONTH_DAY_PATTERN.match(text)
    if m:
        month, day = m.groups()
        return f"{int(year):04d}-{month.zfill(2)}-{day.zfill(2)}"

    m = MONTH_DAY_YEAR_PATTERN.match(text)
    if m:
        month, day, full_year = m.groups()
        return f"{full_year}-{month.zfill(2)}-{day.zfill(2)}"

    parsed = _parse_free_text(text)
    if parsed is None:
        logger.warning(f'Could not properly format date "{raw}", using as-is')
        if diagnostics is not None:
            diagnostics.record("date", raw, raw, "unrecognized date format")
        return raw

    try:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)

        if parsed.year == SENTINEL_YEAR:
            parsed = parsed.replace(year=int(year))
    except (ValueError, OverflowError) as e:
        logger.warning(f'Could not properly format date "{raw}", using as-is: {e}')
        if diagnostics is not None:
            diagnostics.record("date", raw, raw, f"date out of range: {e}")
        return raw

    return parsed.date().isoformat()


def _parse_free_text(text: str) -> Optional[datetime]:
    if not text:
        return None
    try:
        return date_parser.parse(text, default=_PARSER_DEFAULT)
    except (ValueError, OverflowError) as e:
        logger.debug(f"dateutil could not parse {text!r}: {e}")
        return None
