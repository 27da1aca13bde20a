"""
Test fixtures for workout-publisher-api.

Provides an in-memory spreadsheet reader and stubbed Strava collaborators
so tests run offline and deterministically.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Repo root: .../workout-publisher-api
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_publisher_api...`
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from workout_publisher_api.main import app
from workout_publisher_api.api.dependencies import get_sheet_extractor, get_strava_publisher
from workout_publisher_api.models import WorkoutRecord
from workout_publisher_api.services.sheet_extractor import SheetExtractor
from workout_publisher_api.services.sheets_reader import SpreadsheetReader
from workout_publisher_api.services.strava_client import StravaClient
from workout_publisher_api.services.strava_publisher import StravaPublisher


CAMPAIGN_YEAR = 2025
MONDAY = "Monday: Upper Body Push"


# ---------------------------------------------------------------------------
# Fake spreadsheet
# ---------------------------------------------------------------------------


class FakeSheetReader(SpreadsheetReader):
    """Serves canned ranges keyed by (tab, range) and records every read."""

    def __init__(self, ranges: Dict[Tuple[str, str], List[List[str]]]):
        self.ranges = ranges
        self.calls: List[Tuple[str, str]] = []

    def read_range(self, tab: str, a1_range: str) -> List[List[str]]:
        self.calls.append((tab, a1_range))
        return self.ranges.get((tab, a1_range), [])


@pytest.fixture
def monday_ranges() -> Dict[Tuple[str, str], List[List[str]]]:
    """Three-row Monday block at A71 with a blank name in the middle row."""
    return {
        (MONDAY, "A71"): [["3/24"]],
        (MONDAY, "B71:B73"): [["Push-up"], [], ["Row"]],
        (MONDAY, "C71:C73"): [["3"], ["0"], ["4"]],
        (MONDAY, "I71:I73"): [["10,9,9"], ["0"], ["12"]],
    }


@pytest.fixture
def fake_reader(monday_ranges) -> FakeSheetReader:
    return FakeSheetReader(monday_ranges)


@pytest.fixture
def extractor(fake_reader) -> SheetExtractor:
    return SheetExtractor(reader=fake_reader, year=CAMPAIGN_YEAR)


# ---------------------------------------------------------------------------
# Strava stubs
# ---------------------------------------------------------------------------


TEST_CREDENTIALS = {
    "client_id": "12345",
    "client_secret": "secret",
    "refresh_token": "refresh-abc",
}


@pytest.fixture
def strava_client() -> MagicMock:
    """StravaClient double that succeeds by default."""
    client = MagicMock(spec=StravaClient)
    client.refresh_access_token.return_value = {
        "access_token": "access-xyz",
        "expires_at": 1742800000,
        "refresh_token": "refresh-abc",
    }
    client.create_activity.return_value = {"id": 987654321, "name": "Upper Body Push Workout"}
    client.get_athlete.return_value = {"id": 42, "firstname": "Devin", "lastname": "R"}
    client.activity_url.side_effect = StravaClient.activity_url
    return client


@pytest.fixture
def publisher(strava_client) -> StravaPublisher:
    return StravaPublisher(
        client=strava_client,
        resolve_credentials=lambda account: dict(TEST_CREDENTIALS),
        hashtag=f"{CAMPAIGN_YEAR}FitnessJourney",
        clock=lambda: datetime(2025, 3, 24, 18, 5, 42),
    )


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(extractor, publisher) -> TestClient:
    """Per-test FastAPI TestClient wired to the fake sheet and Strava stubs."""
    app.dependency_overrides[get_sheet_extractor] = lambda: extractor
    app.dependency_overrides[get_strava_publisher] = lambda: publisher
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Sample Data Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_workout_dict() -> Dict[str, Any]:
    """Workout record in its camelCase wire format."""
    return {
        "date": "2025-03-24",
        "dayOfWeek": MONDAY,
        "workoutTime": "07:30",
        "title": "Upper Body Push Workout",
        "focus": "Upper Body Push",
        "duration": 3600,
        "sections": [
            {
                "sectionName": "Main Workout",
                "exercises": [
                    {"name": "Bench Press", "sets": 4, "reps": 8, "weight": 185},
                    {"name": "Push-up", "sets": 3, "reps": 9, "notes": "slow eccentric"},
                ],
            }
        ],
        "completionStatus": "Completed",
        "stravaActivityType": "WeightTraining",
    }


@pytest.fixture
def sample_workout(sample_workout_dict) -> WorkoutRecord:
    return WorkoutRecord.model_validate(sample_workout_dict)
