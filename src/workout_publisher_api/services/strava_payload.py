"""
Strava activity payload construction.

Converts a WorkoutRecord into the body of Strava's create-activity call,
including a readable description listing every exercise.
"""

import re
from datetime import datetime
from typing import Optional

from workout_publisher_api.models import ActivityPayload, WorkoutRecord

_WHITESPACE_RE = re.compile(r"\s+")


def format_duration(seconds: int) -> str:
    """Format seconds as "1h 5m 0s", or "5m 0s" below an hour."""
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    remaining_seconds = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m {remaining_seconds}s"
    return f"{minutes}m {remaining_seconds}s"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_workout_description(workout: WorkoutRecord, hashtag: str) -> str:
    """Render the activity description for a workout."""
    description = f"🏋️ {workout.focus} Workout\n\n"

    for section in workout.sections:
        description += f"## {section.section_name}\n"

        for exercise in section.exercises:
            description += f"- {exercise.name}: {exercise.sets}×{exercise.reps}"
            if exercise.weight:
                description += f" @ {_format_number(exercise.weight)}lbs"
            if exercise.notes:
                description += f" ({exercise.notes})"
            description += "\n"

        description += "\n"

    if workout.notes:
        description += f"Notes: {workout.notes}\n\n"

    description += f"Total workout time: {format_duration(workout.duration)}\n"

    if workout.workout_time:
        description += f"Workout time: {workout.workout_time}\n"

    focus_tag = _WHITESPACE_RE.sub("", workout.focus)
    description += f"#{hashtag.lstrip('#')} #{focus_tag}"

    return description


def start_date_local(workout: WorkoutRecord, now: Optional[datetime] = None) -> str:
    """
    Local start time without a zone suffix, e.g. "2025-03-24T07:30:00".

    Uses the workout's own time when set, otherwise the current wall clock
    time on the workout's date.
    """
    if workout.workout_time:
        hours, minutes = workout.workout_time.split(":", 1)
    else:
        now = now or datetime.now()
        hours, minutes = f"{now.hour:02d}", f"{now.minute:02d}"
    return f"{workout.date}T{hours}:{minutes}:00"


def build_activity_payload(
    workout: WorkoutRecord,
    hashtag: str,
    now: Optional[datetime] = None,
) -> ActivityPayload:
    """
    Build the Strava create-activity body for a workout.

    Args:
        workout: Workout to publish
        hashtag: Campaign hashtag appended to the description
        now: Clock override used when the workout has no time

    Returns:
        ActivityPayload; always an indoor (trainer) activity with zero distance
    """
    description = workout.strava_description or format_workout_description(workout, hashtag)

    return ActivityPayload(
        name=workout.title,
        type=workout.strava_activity_type,
        sport_type=workout.strava_activity_type,
        start_date_local=start_date_local(workout, now),
        elapsed_time=workout.duration,
        description=description,
        distance=0,
        trainer=1,
        commute=0,
    )
