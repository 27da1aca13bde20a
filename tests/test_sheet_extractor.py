"""Tests for SheetExtractor."""
from unittest.mock import MagicMock

import pytest

from conftest import CAMPAIGN_YEAR, MONDAY, FakeSheetReader
from workout_publisher_api.services.sheet_extractor import (
    MISSING_PARAMS_ERROR,
    SheetExtractor,
    validate_extract_params,
)
from workout_publisher_api.services.sheets_reader import SheetsReadError


def test_extracts_monday_block(extractor, fake_reader):
    result = extractor.extract(MONDAY, "A71", 3)

    assert result.success is True
    assert result.error is None
    workout = result.data
    assert workout.date == "2025-03-24"
    assert workout.title == "Upper Body Push Workout"
    assert workout.strava_activity_type == "WeightTraining"
    exercises = workout.sections[0].exercises
    assert [(e.name, e.sets, e.reps) for e in exercises] == [("Push-up", 3, 9), ("Row", 4, 12)]
    assert result.issues == []


def test_reads_date_then_name_sets_reps_columns(extractor, fake_reader):
    extractor.extract(MONDAY, "a71", 3)

    assert fake_reader.calls == [
        (MONDAY, "A71"),
        (MONDAY, "B71:B73"),
        (MONDAY, "C71:C73"),
        (MONDAY, "I71:I73"),
    ]


def test_workout_time_passed_through(extractor):
    result = extractor.extract(MONDAY, "A71", 3, workout_time="07:30")
    assert result.data.workout_time == "07:30"


def test_missing_date_cell():
    reader = FakeSheetReader({})
    result = SheetExtractor(reader, CAMPAIGN_YEAR).extract(MONDAY, "A71", 3)

    assert result.success is False
    assert result.error == "No date found in cell A71"
    assert reader.calls == [(MONDAY, "A71")]


def test_empty_exercise_range():
    reader = FakeSheetReader({(MONDAY, "A71"): [["3/24"]]})
    result = SheetExtractor(reader, CAMPAIGN_YEAR).extract(MONDAY, "A71", 6)

    assert result.success is False
    assert result.error == "No exercises found in range B71:B76"


def test_missing_sets_and_reps_columns_default_to_zero():
    reader = FakeSheetReader({
        (MONDAY, "A71"): [["3/24/2025"]],
        (MONDAY, "B71:B72"): [["Dips"], ["Flyes"]],
    })
    result = SheetExtractor(reader, CAMPAIGN_YEAR).extract(MONDAY, "A71", 2)

    assert result.success is True
    exercises = result.data.sections[0].exercises
    assert [(e.sets, e.reps) for e in exercises] == [(0, 0), (0, 0)]


def test_degraded_cells_reported_as_issues(monday_ranges):
    monday_ranges[(MONDAY, "I71:I73")] = [["x,y"], ["0"], ["12"]]
    result = SheetExtractor(FakeSheetReader(monday_ranges), CAMPAIGN_YEAR).extract(MONDAY, "A71", 3)

    assert result.success is True
    assert len(result.issues) == 1
    assert result.issues[0].field == "reps"
    assert result.issues[0].row == 71


def test_reader_errors_become_failed_result():
    reader = MagicMock()
    reader.read_range.side_effect = SheetsReadError("Google Sheets read failed: HTTP 403")

    result = SheetExtractor(reader, CAMPAIGN_YEAR).extract(MONDAY, "A71", 3)

    assert result.success is False
    assert "HTTP 403" in result.error


def test_unexpected_errors_become_failed_result():
    reader = MagicMock()
    reader.read_range.side_effect = KeyError("boom")

    result = SheetExtractor(reader, CAMPAIGN_YEAR).extract(MONDAY, "A71", 3)

    assert result.success is False
    assert "boom" in result.error


def test_invalid_params_skip_reader(fake_reader, extractor):
    result = extractor.extract(MONDAY, "", 3)

    assert result.success is False
    assert result.error == MISSING_PARAMS_ERROR
    assert fake_reader.calls == []


@pytest.mark.parametrize(
    "day,cell,count,expected",
    [
        (None, "A71", 3, MISSING_PARAMS_ERROR),
        ("  ", "A71", 3, MISSING_PARAMS_ERROR),
        (MONDAY, None, 3, MISSING_PARAMS_ERROR),
        (MONDAY, "A71", None, MISSING_PARAMS_ERROR),
        (MONDAY, "A71", 0, MISSING_PARAMS_ERROR),
        (MONDAY, "71A", 3, "Invalid start cell '71A' (expected a reference like A71)"),
        (MONDAY, "A71", -2, "exerciseCount must be a positive integer"),
        (MONDAY, "A71", 3, None),
    ],
)
def test_validate_extract_params(day, cell, count, expected):
    assert validate_extract_params(day, cell, count) == expected


def test_out_of_range_date_degrades_instead_of_failing(extractor, monday_ranges):
    monday_ranges[(MONDAY, "A71")] = [["9999-12-31T23:00:00-05:00"]]

    result = extractor.extract(MONDAY, "A71", 3)

    assert result.success is True
    assert result.data.date == "9999-12-31T23:00:00-05:00"
    assert [issue.field for issue in result.issues] == ["date"]
