"""Builds a WorkoutRecord from the raw cell values of one sheet block."""

import logging
from typing import List, Optional, Sequence

from workout_publisher_api.models import (
    Exercise,
    WorkoutRecord,
    WorkoutSection,
    activity_type_for_day,
    day_label,
    focus_for_day,
)
from workout_publisher_api.services.date_normalizer import normalize_sheet_date
from workout_publisher_api.utils import average_reps, parse_leading_int

logger = logging.getLogger(__name__)

MAIN_SECTION_NAME = "Main Workout"
DEFAULT_DURATION_SEC = 3600


def _cell(values: Sequence[str], index: int) -> str:
    if index < len(values) and values[index] is not None:
        return str(values[index])
    return "0"


def _parse_sets(raw: str, diagnostics, row: Optional[int]) -> int:
    sets = parse_leading_int(raw)
    if sets is None or sets < 0:
        if diagnostics is not None and raw.strip():
            diagnostics.record("sets", raw, 0, "not a whole number", row=row)
        return 0
    return sets


def build_workout_from_cells(
    date_value: str,
    exercise_names: Sequence[Optional[str]],
    sets: Sequence[str],
    reps: Sequence[str],
    workout_day: str,
    year: int,
    workout_time: Optional[str] = None,
    diagnostics=None,
    first_row: Optional[int] = None,
) -> WorkoutRecord:
    """
    Assemble a workout from parallel columns of cell values.

    The three sequences are aligned by index (one sheet row each). Rows with
    an empty exercise name are skipped; missing sets/reps cells count as "0".

    Args:
        date_value: Raw date cell
        exercise_names: Exercise name per row
        sets: Set count per row
        reps: Reps per row ("12" or "10,9,9")
        workout_day: Day label, also used for title, focus and activity type
        year: Year for dates without one
        workout_time: Optional HH:MM start time
        diagnostics: Optional ParseDiagnostics for degraded cells
        first_row: Sheet row of index 0, used in diagnostics

    Returns:
        WorkoutRecord with a single "Main Workout" section
    """
    focus = focus_for_day(workout_day)

    exercises: List[Exercise] = []
    for index, name in enumerate(exercise_names):
        name = "" if name is None else str(name).strip()
        if not name:
            continue
        row = first_row + index if first_row is not None else None
        exercises.append(
            Exercise(
                name=name,
                sets=_parse_sets(_cell(sets, index), diagnostics, row),
                reps=average_reps(_cell(reps, index), diagnostics, row=row),
            )
        )

    logger.debug(f"Assembled {len(exercises)} exercises for '{workout_day}'")

    return WorkoutRecord(
        date=normalize_sheet_date(date_value, year, diagnostics),
        day_of_week=day_label(workout_day),
        workout_time=workout_time,
        title=f"{focus} Workout",
        focus=focus,
        duration=DEFAULT_DURATION_SEC,
        sections=[WorkoutSection(section_name=MAIN_SECTION_NAME, exercises=exercises)],
        completion_status="Completed",
        strava_activity_type=activity_type_for_day(workout_day),
    )
