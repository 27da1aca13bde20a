"""
FastAPI dependency providers.

Each request gets freshly constructed collaborators; tests replace them
through app.dependency_overrides.
"""

from workout_publisher_api.config import settings
from workout_publisher_api.services.sheet_extractor import SheetExtractor
from workout_publisher_api.services.sheets_reader import get_sheet_reader
from workout_publisher_api.services.strava_client import StravaClient
from workout_publisher_api.services.strava_publisher import StravaPublisher


def get_sheet_extractor() -> SheetExtractor:
    return SheetExtractor(reader=get_sheet_reader(), year=settings.CAMPAIGN_YEAR)


def get_strava_publisher() -> StravaPublisher:
    return StravaPublisher(
        client=StravaClient(),
        resolve_credentials=settings.get_strava_credentials,
        hashtag=settings.CAMPAIGN_HASHTAG,
    )
