"""Data models for sheet extraction and Strava publishing."""
import re
from enum import Enum
from typing import List, Optional, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

CompletionStatus = Literal['Completed', 'Partial', 'Skipped', 'Planned']

_WORKOUT_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class WorkoutDay(str, Enum):
    """Training schedule days. Each label is also the spreadsheet tab name."""
    MONDAY = "Monday: Upper Body Push"
    TUESDAY = "Tuesday: Cardio + Abs"
    WEDNESDAY = "Wednesday: Lower Body"
    THURSDAY = "Thursday: Cardio + Abs"
    FRIDAY = "Friday: Upper Body Pull"
    SATURDAY = "Saturday: Full Body"


WORKOUT_TYPE_MAPPING = {
    WorkoutDay.MONDAY.value: "WeightTraining",
    WorkoutDay.TUESDAY.value: "Workout",
    WorkoutDay.WEDNESDAY.value: "WeightTraining",
    WorkoutDay.THURSDAY.value: "Workout",
    WorkoutDay.FRIDAY.value: "WeightTraining",
    WorkoutDay.SATURDAY.value: "WeightTraining",
}

DEFAULT_ACTIVITY_TYPE = "Workout"


def day_label(workout_day) -> str:
    """Plain label for a WorkoutDay member or a raw tab name."""
    if isinstance(workout_day, Enum):
        return str(workout_day.value)
    return str(workout_day)


def activity_type_for_day(workout_day: str) -> str:
    """Strava activity type for a workout day label ("Workout" if unknown)."""
    return WORKOUT_TYPE_MAPPING.get(day_label(workout_day), DEFAULT_ACTIVITY_TYPE)


def focus_for_day(workout_day: str) -> str:
    """Text after the colon in a day label, or the whole label."""
    label = day_label(workout_day)
    if ":" in label:
        focus = label.split(":", 1)[1].strip()
        if focus:
            return focus
    return label


def _normalize_workout_time(value):
    if value is None or value == "":
        return None
    m = _WORKOUT_TIME_RE.match(str(value).strip())
    if not m or int(m.group(1)) > 23 or int(m.group(2)) > 59:
        raise ValueError("workoutTime must be HH:MM")
    return f"{int(m.group(1)):02d}:{m.group(2)}"


class Exercise(BaseModel):
    """Represents a single exercise row from the sheet."""
    name: str
    sets: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    weight: Optional[float] = None  # lbs
    distance: Optional[float] = None
    duration: Optional[int] = None  # seconds
    rest_time: Optional[int] = Field(default=None, alias="restTime")  # seconds between sets
    tempo: Optional[str] = None  # e.g. "3-1-3"
    notes: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "ignore"


class WorkoutSection(BaseModel):
    """A named group of exercises, e.g. "Warm-up" or "Main Workout"."""
    section_name: str = Field(alias="sectionName")
    exercises: List[Exercise] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "ignore"


class WorkoutRecord(BaseModel):
    """A complete workout for one date, ready to publish."""
    date: str  # YYYY-MM-DD
    day_of_week: str = Field(alias="dayOfWeek")
    workout_time: Optional[str] = Field(default=None, alias="workoutTime")

    title: str
    focus: str
    duration: int = Field(default=3600, ge=0)  # seconds

    sections: List[WorkoutSection] = Field(default_factory=list)

    completion_status: CompletionStatus = Field(default="Completed", alias="completionStatus")

    strava_activity_type: str = Field(default=DEFAULT_ACTIVITY_TYPE, alias="stravaActivityType")
    # Overrides the generated activity description when set
    strava_description: Optional[str] = Field(default=None, alias="stravaDescription")

    notes: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def default_activity_type(cls, data):
        if isinstance(data, dict) and not (
            data.get("stravaActivityType") or data.get("strava_activity_type")
        ):
            day = data.get("dayOfWeek", data.get("day_of_week"))
            if day:
                data = {**data, "stravaActivityType": activity_type_for_day(day)}
        return data

    @field_validator("workout_time", mode="before")
    @classmethod
    def check_workout_time(cls, v):
        return _normalize_workout_time(v)


class ActivityPayload(BaseModel):
    """Body of Strava's create-activity request."""
    name: str
    type: str
    sport_type: str
    start_date_local: str  # local time, no zone suffix
    elapsed_time: int
    description: str
    distance: float = 0
    trainer: Literal[0, 1] = 1
    commute: Literal[0, 1] = 0


class ParseIssue(BaseModel):
    """A sheet value that could not be parsed and was replaced by a fallback."""
    field: str
    row: Optional[int] = None
    raw_value: str = Field(alias="rawValue")
    fallback: str
    reason: str

    class Config:
        populate_by_name = True


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class ExtractWorkoutRequest(BaseModel):
    """Which tab and rows to read. Fields are validated by the route."""
    workout_day: Optional[str] = Field(default=None, alias="workoutDay")
    start_cell: Optional[str] = Field(default=None, alias="startCell")
    exercise_count: Optional[int] = Field(default=None, alias="exerciseCount")

    class Config:
        populate_by_name = True
        extra = "ignore"


class ExtractAndPublishRequest(ExtractWorkoutRequest):
    workout_time: Optional[str] = Field(default=None, alias="workoutTime")
    account: Optional[str] = None  # named Strava credential set

    @field_validator("workout_time", mode="before")
    @classmethod
    def check_workout_time(cls, v):
        return _normalize_workout_time(v)


class ExtractWorkoutResponse(BaseModel):
    success: bool
    data: Optional[WorkoutRecord] = None
    error: Optional[str] = None
    issues: List[ParseIssue] = Field(default_factory=list)


class StravaPostResult(BaseModel):
    success: bool
    strava_id: Optional[int] = Field(default=None, alias="stravaId")
    url: Optional[str] = None
    error: Optional[str] = None

    class Config:
        populate_by_name = True


class PublishWorkoutResponse(BaseModel):
    success: bool
    strava_id: Optional[int] = Field(default=None, alias="stravaId")
    strava_url: Optional[str] = Field(default=None, alias="stravaUrl")
    error: Optional[str] = None
    data: Optional[WorkoutRecord] = None

    class Config:
        populate_by_name = True


class ExtractAndPublishResponse(BaseModel):
    success: bool
    data: Optional[WorkoutRecord] = None
    strava_post_id: Optional[int] = Field(default=None, alias="stravaPostId")
    strava_url: Optional[str] = Field(default=None, alias="stravaUrl")
    error: Optional[str] = None
    issues: List[ParseIssue] = Field(default_factory=list)

    class Config:
        populate_by_name = True
