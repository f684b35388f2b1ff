from typing import Optional, Union

from pydantic import BaseModel, Field

from workout_engine.core.constants import CalcField, WorkoutType
from workout_engine.schemas.workout import (
    ExerciseEntry,
    ExerciseRecord,
    ExerciseSelection,
    FartlekSpec,
    IntervalSpec,
    SimpleRunSpec,
)


class RecalcRequest(BaseModel):
    spec: SimpleRunSpec
    changed_field: CalcField
    # what the user typed: '4:30', '45:00', '10,5' or a plain number
    new_value: Optional[Union[float, str]] = None


class RecalcResponse(BaseModel):
    update: dict
    spec: SimpleRunSpec
    duration: str  # 'H:MM:SS' or 'M:SS'
    pace: str      # 'M:SS'


class DescribeRequest(BaseModel):
    """Exactly the block matching `type` is read."""

    type: WorkoutType
    simple: Optional[SimpleRunSpec] = None
    interval: Optional[IntervalSpec] = None
    fartlek: Optional[FartlekSpec] = None
    exercises: list[ExerciseEntry] = Field(default_factory=list)


class DescribeResponse(BaseModel):
    description: str
    total_distance_km: Optional[float] = None


class ParseRequest(BaseModel):
    type: WorkoutType
    description: str = ""
    # stored exercise rows; preferred over the text for ofp/sbu
    exercises: list[ExerciseRecord] = Field(default_factory=list)


class ParseResponse(BaseModel):
    type: WorkoutType
    simple: Optional[SimpleRunSpec] = None
    interval: Optional[IntervalSpec] = None
    fartlek: Optional[FartlekSpec] = None
    exercises: Optional[ExerciseSelection] = None
