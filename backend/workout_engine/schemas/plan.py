from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from workout_engine.core.constants import (
    RecoveryKind,
    RestKind,
    WorkoutType,
    get_activity_type_label,
    normalize_plan_type,
)
from workout_engine.schemas.workout import ExerciseEntry


class PlanSegment(BaseModel):
    reps: Optional[int] = None
    distance_m: Optional[int] = None
    pace: Optional[str] = None
    recovery_m: Optional[int] = None
    recovery_type: RecoveryKind = RecoveryKind.jog

    model_config = ConfigDict(extra="ignore")

    @field_validator("recovery_type", mode="before")
    @classmethod
    def _default_recovery(cls, v):
        return RecoveryKind.jog if v in ("", None) else v


class PlanExercise(BaseModel):
    name: str = "Упражнение"
    exercise_id: Optional[int] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    duration_min: Optional[int] = None
    distance_m: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class PlanDay(BaseModel):
    """One day of a plan as the AI planner emits it (structured fields, no text)."""

    type: WorkoutType = WorkoutType.rest
    # simple runs
    distance_km: Optional[float] = None
    pace: Optional[str] = None  # 'M:SS'
    duration_minutes: Optional[int] = None
    notes: Optional[str] = None
    # intervals / fartlek
    warmup_km: Optional[float] = None
    reps: Optional[int] = None
    interval_m: Optional[int] = None
    interval_pace: Optional[str] = None
    rest_m: Optional[int] = None
    rest_type: RestKind = RestKind.jog
    cooldown_km: Optional[float] = None
    segments: list[PlanSegment] = Field(default_factory=list)
    # ofp / sbu
    exercises: list[PlanExercise] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v):
        return normalize_plan_type(v)

    @field_validator("rest_type", mode="before")
    @classmethod
    def _default_rest(cls, v):
        return RestKind.jog if v in ("", None) else v


class NormalizedPlanDay(BaseModel):
    type: WorkoutType
    description: str
    distance_km: Optional[float] = None
    duration_minutes: Optional[int] = None
    pace: Optional[str] = None
    exercises: list[ExerciseEntry] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def type_label(self) -> str:
        return get_activity_type_label(self.type)
