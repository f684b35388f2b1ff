from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from workout_engine.core.constants import (
    ExerciseCategory,
    RecoveryKind,
    RestKind,
    WorkoutKind,
    METERS_PER_KM,
)


class SimpleRunSpec(BaseModel):
    """Distance / duration / pace calculator for easy, tempo, long, control and race runs."""

    kind: WorkoutKind = WorkoutKind.easy
    distance_km: Optional[float] = Field(None, ge=0)
    duration_sec: Optional[int] = Field(None, ge=0)
    pace_min_per_km: Optional[float] = Field(None, gt=0)
    heart_rate_text: Optional[str] = None


class IntervalSpec(BaseModel):
    warmup_km: Optional[float] = Field(None, ge=0)
    warmup_pace: Optional[str] = None  # 'M:SS'
    reps: Optional[int] = Field(None, ge=0)
    rep_distance_m: Optional[int] = Field(None, ge=0)
    rep_pace: Optional[str] = None
    rest_distance_m: Optional[int] = Field(None, ge=0)
    rest_kind: RestKind = RestKind.jog
    cooldown_km: Optional[float] = Field(None, ge=0)
    cooldown_pace: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def total_distance_km(self) -> Optional[float]:
        reps = self.reps or 0
        series_m = reps * ((self.rep_distance_m or 0) + (self.rest_distance_m or 0))
        total = (self.warmup_km or 0) + series_m / METERS_PER_KM + (self.cooldown_km or 0)
        return total if total > 0 else None


class FartlekSegment(BaseModel):
    id: int = 1
    reps: Optional[int] = Field(None, ge=0)
    accel_distance_m: Optional[int] = Field(None, ge=0)
    accel_pace: Optional[str] = None
    recovery_distance_m: Optional[int] = Field(None, ge=0)
    recovery_kind: RecoveryKind = RecoveryKind.jog

    @property
    def distance_m(self) -> int:
        return (self.reps or 0) * ((self.accel_distance_m or 0) + (self.recovery_distance_m or 0))


def _default_segments() -> list[FartlekSegment]:
    return [FartlekSegment(id=1)]


class FartlekSpec(BaseModel):
    warmup_km: Optional[float] = Field(None, ge=0)
    segments: list[FartlekSegment] = Field(default_factory=_default_segments)
    cooldown_km: Optional[float] = Field(None, ge=0)

    @computed_field  # type: ignore[misc]
    @property
    def total_distance_km(self) -> Optional[float]:
        segments_m = sum(seg.distance_m for seg in self.segments)
        total = (self.warmup_km or 0) + segments_m / METERS_PER_KM + (self.cooldown_km or 0)
        return total if total > 0 else None

    def add_segment(self, **fields) -> FartlekSegment:
        """Append a segment with the next free id."""
        next_id = max([0] + [seg.id for seg in self.segments]) + 1
        segment = FartlekSegment(id=next_id, **fields)
        self.segments = [*self.segments, segment]
        return segment

    def remove_segment(self, segment_id: int) -> None:
        self.segments = [seg for seg in self.segments if seg.id != segment_id]

    def update_segment(self, segment_id: int, **fields) -> None:
        self.segments = [
            seg.model_copy(update=fields) if seg.id == segment_id else seg
            for seg in self.segments
        ]


class LibraryExercise(BaseModel):
    """An exercise from the shared library with its default load."""

    id: int
    name: str
    # Raw library category; 'other' and 'strength' also appear in the library
    category: str = ExerciseCategory.ofp.value
    default_sets: Optional[int] = None
    default_reps: Optional[int] = None
    default_distance_m: Optional[int] = None
    default_duration_sec: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class ExerciseEntry(BaseModel):
    """
    One line of an ofp/sbu workout.

    Library entries carry `source_library_id`; their sets/reps/weight (ofp)
    or distance (sbu) are overrides layered over the library defaults.
    Custom entries carry their own values.
    """

    id: str
    name: str
    category: ExerciseCategory = ExerciseCategory.ofp
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, ge=0)
    distance_m: Optional[int] = Field(None, ge=0)
    duration_sec: Optional[int] = Field(None, ge=0)
    source_library_id: Optional[int] = None

    @property
    def is_library(self) -> bool:
        return self.source_library_id is not None


class ExerciseRecord(BaseModel):
    """Structured exercise row stored alongside a plan day."""

    exercise_id: Optional[int] = None
    name: str = ""
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    distance_m: Optional[int] = None
    duration_sec: Optional[int] = None
    order_index: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class ExerciseSelection(BaseModel):
    category: ExerciseCategory = ExerciseCategory.ofp
    library_entries: list[ExerciseEntry] = Field(default_factory=list)
    custom_entries: list[ExerciseEntry] = Field(default_factory=list)

    @property
    def entries(self) -> list[ExerciseEntry]:
        """Library lines first, then custom lines."""
        return [*self.library_entries, *self.custom_entries]
