from fastapi import APIRouter, Depends, HTTPException

from workout_engine.core.constants import (
    ExerciseCategory,
    WorkoutCategory,
    WorkoutType,
    SIMPLE_RUN_TYPES,
    category_for_type,
)
from workout_engine.core.time_utils import format_duration, format_pace
from workout_engine.library import get_library
from workout_engine.schemas.api import (
    DescribeRequest,
    DescribeResponse,
    ParseRequest,
    ParseResponse,
    RecalcRequest,
    RecalcResponse,
)
from workout_engine.schemas.plan import NormalizedPlanDay, PlanDay
from workout_engine.schemas.workout import (
    FartlekSpec,
    IntervalSpec,
    LibraryExercise,
    SimpleRunSpec,
)
from workout_engine.services import generator, parser
from workout_engine.services.calculator import apply_change, recalc
from workout_engine.services.matcher import library_for_category
from workout_engine.services.plan_day import normalize_plan_day

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _exercise_category(workout_type: WorkoutType) -> ExerciseCategory:
    category = category_for_type(workout_type)
    if category is WorkoutCategory.running:
        raise HTTPException(status_code=422, detail=f"{workout_type.value} is not an exercise workout")
    return ExerciseCategory(category.value)


@router.post("/recalc", response_model=RecalcResponse)
def recalc_simple_run(payload: RecalcRequest):
    """Apply one calculator edit and return the leg it recomputed."""
    update = recalc(payload.spec, payload.changed_field, payload.new_value)
    spec = apply_change(payload.spec, payload.changed_field, payload.new_value)
    return RecalcResponse(
        update=update,
        spec=spec,
        duration=format_duration(spec.duration_sec),
        pace=format_pace(spec.pace_min_per_km),
    )


@router.post("/describe", response_model=DescribeResponse)
def describe_workout(
    payload: DescribeRequest,
    library: list[LibraryExercise] = Depends(get_library),
):
    wt = payload.type
    if wt in SIMPLE_RUN_TYPES:
        spec = (payload.simple or SimpleRunSpec()).model_copy(update={"kind": SIMPLE_RUN_TYPES[wt]})
        return DescribeResponse(
            description=generator.generate_simple_run(spec),
            total_distance_km=spec.distance_km,
        )
    if wt is WorkoutType.interval:
        spec = payload.interval or IntervalSpec()
        return DescribeResponse(
            description=generator.generate_interval(spec),
            total_distance_km=spec.total_distance_km,
        )
    if wt is WorkoutType.fartlek:
        spec = payload.fartlek or FartlekSpec()
        return DescribeResponse(
            description=generator.generate_fartlek(spec),
            total_distance_km=spec.total_distance_km,
        )
    if wt in (WorkoutType.rest, WorkoutType.free):
        return DescribeResponse(description="")

    category = _exercise_category(wt)
    return DescribeResponse(
        description=generator.generate_exercise_list(
            payload.exercises, category, library_for_category(library, category)
        )
    )


@router.post("/parse", response_model=ParseResponse)
def parse_workout(
    payload: ParseRequest,
    library: list[LibraryExercise] = Depends(get_library),
):
    """Pre-fill calculators from a stored or AI-written description."""
    wt = payload.type
    if wt in SIMPLE_RUN_TYPES:
        return ParseResponse(
            type=wt,
            simple=parser.parse_simple_run(payload.description, SIMPLE_RUN_TYPES[wt]),
        )
    if wt is WorkoutType.interval:
        return ParseResponse(type=wt, interval=parser.parse_interval(payload.description))
    if wt is WorkoutType.fartlek:
        return ParseResponse(type=wt, fartlek=parser.parse_fartlek(payload.description))
    if wt in (WorkoutType.rest, WorkoutType.free):
        return ParseResponse(type=wt)

    category = _exercise_category(wt)
    selection = parser.parse_exercises(
        payload.description,
        category,
        library_for_category(library, category),
        records=payload.exercises,
    )
    return ParseResponse(type=wt, exercises=selection)


@router.post("/plan-day", response_model=NormalizedPlanDay)
def normalize_ai_plan_day(
    payload: PlanDay,
    library: list[LibraryExercise] = Depends(get_library),
):
    return normalize_plan_day(payload, library)
