"""
Sheet extraction.

Reads one workout block from a day tab. The layout is fixed:
column A holds the date (the start cell), B the exercise names, C the set
counts and I the reps, one exercise per row starting at the date row.
"""

import logging
from typing import List, Optional

from workout_publisher_api.models import ExtractWorkoutResponse, day_label
from workout_publisher_api.services.diagnostics import ParseDiagnostics
from workout_publisher_api.services.sheets_reader import (
    SheetsConfigError,
    SheetsReadError,
    SpreadsheetReader,
)
from workout_publisher_api.services.workout_assembler import build_workout_from_cells
from workout_publisher_api.utils import calculate_range, start_row

logger = logging.getLogger(__name__)

NAME_COLUMN = "B"
SETS_COLUMN = "C"
REPS_COLUMN = "I"


class ExtractionError(RuntimeError):
    """Raised when the sheet has no data where the workout should be."""


MISSING_PARAMS_ERROR = "Missing required parameters (workoutDay, startCell, exerciseCount)"


def validate_extract_params(
    workout_day: Optional[str],
    start_cell: Optional[str],
    exercise_count: Optional[int],
) -> Optional[str]:
    """Return an error message for invalid extraction parameters, or None."""
    if not workout_day or not day_label(workout_day).strip() or not start_cell or not exercise_count:
        return MISSING_PARAMS_ERROR
    if start_row(start_cell) is None:
        return f"Invalid start cell '{start_cell}' (expected a reference like A71)"
    if exercise_count < 1:
        return "exerciseCount must be a positive integer"
    return None


def _first_column(rows: List[List[str]], default: str = "") -> List[str]:
    return [row[0] if row and row[0] != "" else default for row in rows]


class SheetExtractor:
    """Turns a block of sheet cells into a WorkoutRecord."""

    def __init__(self, reader: SpreadsheetReader, year: int):
        self.reader = reader
        self.year = year

    def extract(
        self,
        workout_day: str,
        start_cell: str,
        exercise_count: int,
        workout_time: Optional[str] = None,
    ) -> ExtractWorkoutResponse:
        """
        Read and assemble a workout. Never raises.

        Returns:
            ExtractWorkoutResponse with success=True and the record, or
            success=False and an error message
        """
        error = validate_extract_params(workout_day, start_cell, exercise_count)
        if error:
            return ExtractWorkoutResponse(success=False, error=error)

        tab = day_label(workout_day)
        start_cell = start_cell.strip().upper()

        try:
            date_rows = self.reader.read_range(tab, start_cell)
            if not date_rows or not date_rows[0]:
                raise ExtractionError(f"No date found in cell {start_cell}")
            date_value = date_rows[0][0]
            logger.info(f"Raw date value from spreadsheet: {date_value}")

            exercise_range = calculate_range(start_cell, NAME_COLUMN, exercise_count)
            name_rows = self.reader.read_range(tab, exercise_range)
            if not name_rows:
                raise ExtractionError(f"No exercises found in range {exercise_range}")

            sets_rows = self.reader.read_range(
                tab, calculate_range(start_cell, SETS_COLUMN, exercise_count)
            )
            reps_rows = self.reader.read_range(
                tab, calculate_range(start_cell, REPS_COLUMN, exercise_count)
            )

            names = _first_column(name_rows)
            sets = _first_column(sets_rows, default="0")
            reps = _first_column(reps_rows, default="0")
            logger.info(f"Extracted data: exercises={names}, sets={sets}, reps={reps}")

            diagnostics = ParseDiagnostics()
            workout = build_workout_from_cells(
                date_value,
                names,
                sets,
                reps,
                workout_day=tab,
                year=self.year,
                workout_time=workout_time,
                diagnostics=diagnostics,
                first_row=start_row(start_cell),
            )
            logger.info(f"Formatted date: {workout.date}")
            if diagnostics.count:
                logger.warning(f"Extraction degraded {diagnostics.count} cell(s) in '{tab}'")

            return ExtractWorkoutResponse(success=True, data=workout, issues=diagnostics.issues)

        except (ExtractionError, SheetsConfigError, SheetsReadError) as e:
            logger.error(f"Workout extraction failed: {e}")
            return ExtractWorkoutResponse(success=False, error=str(e))
        except Exception as e:
            logger.exception(f"Error extracting workout data: {e}")
            return ExtractWorkoutResponse(success=False, error=str(e))
