"""API routes for sheet extraction and Strava publishing."""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from workout_publisher_api.api.dependencies import get_sheet_extractor, get_strava_publisher
from workout_publisher_api.models import (
    ExtractAndPublishRequest,
    ExtractAndPublishResponse,
    ExtractWorkoutRequest,
    ExtractWorkoutResponse,
    PublishWorkoutResponse,
    WorkoutDay,
    WorkoutRecord,
    activity_type_for_day,
    focus_for_day,
)
from workout_publisher_api.services.sheet_extractor import SheetExtractor, validate_extract_params
from workout_publisher_api.services.strava_publisher import StravaPublisher

logger = logging.getLogger(__name__)

router = APIRouter()


def _json(model, status_code: int) -> JSONResponse:
    return JSONResponse(
        content=model.model_dump(mode="json", by_alias=True, exclude_none=True),
        status_code=status_code,
    )


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(content={"success": False, "error": error}, status_code=400)


# ---------------------------------------------------------------------------
# Health / reference data
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}


@router.get("/workout-days")
def list_workout_days():
    """Workout day labels (also the sheet tab names) and their activity types."""
    return [
        {
            "label": day.value,
            "focus": focus_for_day(day),
            "stravaActivityType": activity_type_for_day(day),
        }
        for day in WorkoutDay
    ]


# ---------------------------------------------------------------------------
# Extract / publish
# ---------------------------------------------------------------------------


@router.post("/workouts/extract")
async def extract_workout(
    request: ExtractWorkoutRequest,
    extractor: SheetExtractor = Depends(get_sheet_extractor),
):
    """
    Read a workout block from the sheet.

    Returns 400 for missing or malformed parameters, 500 when the sheet
    cannot be read or the range is empty.
    """
    error = validate_extract_params(request.workout_day, request.start_cell, request.exercise_count)
    if error:
        return _bad_request(error)

    result: ExtractWorkoutResponse = await asyncio.to_thread(
        extractor.extract,
        request.workout_day,
        request.start_cell,
        request.exercise_count,
    )
    return _json(result, 200 if result.success else 500)


@router.post("/workouts/publish")
async def publish_workout(
    workout: WorkoutRecord,
    account: Optional[str] = Query(None, description="Named Strava credential set"),
    publisher: StravaPublisher = Depends(get_strava_publisher),
):
    """Post an already extracted workout to Strava."""
    if not workout.date or not workout.title or not workout.sections:
        return _bad_request("Invalid workout data provided")

    result = await asyncio.to_thread(publisher.publish, workout, account)

    response = PublishWorkoutResponse(
        success=result.success,
        strava_id=result.strava_id,
        strava_url=result.url,
        error=result.error,
        data=workout,
    )
    return _json(response, 200 if result.success else 500)


@router.post("/workouts/extract-and-publish")
async def extract_and_publish_workout(
    request: ExtractAndPublishRequest,
    extractor: SheetExtractor = Depends(get_sheet_extractor),
    publisher: StravaPublisher = Depends(get_strava_publisher),
):
    """
    Extract a workout from the sheet, then post it to Strava.

    Strava is only called when extraction succeeds. A failed post after a
    successful extraction is reported as-is; nothing is rolled back.
    """
    error = validate_extract_params(request.workout_day, request.start_cell, request.exercise_count)
    if error:
        return _bad_request(error)

    logger.info("Step 1: Extracting workout data from Google Sheets...")
    extracted: ExtractWorkoutResponse = await asyncio.to_thread(
        extractor.extract,
        request.workout_day,
        request.start_cell,
        request.exercise_count,
        request.workout_time,
    )
    if not extracted.success or extracted.data is None:
        logger.error(f"Workout extraction failed: {extracted.error}")
        response = ExtractAndPublishResponse(
            success=False,
            error=extracted.error or "Failed to extract workout data",
            issues=extracted.issues,
        )
        return _json(response, 500)

    logger.info("Step 2: Posting workout data to Strava...")
    workout = extracted.data
    posted = await asyncio.to_thread(publisher.publish, workout, request.account)

    response = ExtractAndPublishResponse(
        success=posted.success,
        data=workout,
        strava_post_id=posted.strava_id,
        strava_url=posted.url,
        error=posted.error,
        issues=extracted.issues,
    )
    return _json(response, 200 if posted.success else 500)


@router.get("/strava/athlete")
async def verify_strava_account(
    account: Optional[str] = Query(None, description="Named Strava credential set"),
    publisher: StravaPublisher = Depends(get_strava_publisher),
):
    """Verify Strava credentials by fetching the authenticated athlete."""
    try:
        athlete = await asyncio.to_thread(publisher.verify, account)
    except Exception as e:
        logger.error(f"Strava authentication failed: {e}")
        return JSONResponse(content={"success": False, "error": str(e)}, status_code=500)

    return {
        "success": True,
        "athlete": {
            "id": athlete.get("id"),
            "firstname": athlete.get("firstname"),
            "lastname": athlete.get("lastname"),
            "username": athlete.get("username"),
        },
    }
