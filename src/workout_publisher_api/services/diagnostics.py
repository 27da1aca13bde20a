"""Collects sheet values that were replaced by a safe default during parsing."""

import logging
from typing import List, Optional

from workout_publisher_api.models import ParseIssue

logger = logging.getLogger(__name__)


class ParseDiagnostics:
    """
    Per-extraction record of degraded cells.

    Parsing never fails on a malformed cell; it substitutes a fallback
    (0 for counts, the raw text for dates) and reports it here.
    """

    def __init__(self):
        self.issues: List[ParseIssue] = []

    def record(
        self,
        field: str,
        raw_value: str,
        fallback,
        reason: str,
        row: Optional[int] = None,
    ) -> None:
        issue = ParseIssue(
            field=field,
            row=row,
            raw_value=str(raw_value),
            fallback=str(fallback),
            reason=reason,
        )
        self.issues.append(issue)
        location = f" (row {row})" if row is not None else ""
        logger.warning(
            f"Degraded {field}{location}: {reason}; "
            f"raw={raw_value!r} -> {fallback!r}"
        )

    @property
    def count(self) -> int:
        return len(self.issues)

    def count_for(self, field: str) -> int:
        return sum(1 for issue in self.issues if issue.field == field)
