"""Turn an AI plan day into the same description a user would build by hand.

The planner returns structured fields; rendering them through the
generator keeps AI-written and manually entered workouts byte-identical
for the same numbers, so both can be re-parsed the same way later.
"""

import logging
from typing import Iterable, Optional

from workout_engine.core.config import settings
from workout_engine.core.constants import (
    CalcField,
    ExerciseCategory,
    WorkoutCategory,
    WorkoutType,
    SIMPLE_RUN_TYPES,
    category_for_type,
)
from workout_engine.core.time_utils import format_pace, parse_pace
from workout_engine.schemas.plan import NormalizedPlanDay, PlanDay
from workout_engine.schemas.workout import (
    ExerciseEntry,
    FartlekSegment,
    FartlekSpec,
    IntervalSpec,
    LibraryExercise,
    SimpleRunSpec,
)
from workout_engine.services import generator
from workout_engine.services.calculator import recalc
from workout_engine.services.matcher import library_for_category, match_exercise
from workout_engine.services.parser import parse_exercises

logger = logging.getLogger(__name__)


def _simple_run(day: PlanDay) -> NormalizedPlanDay:
    kind = SIMPLE_RUN_TYPES[day.type]
    pace = parse_pace(day.pace) or None

    if day.distance_km is not None and day.distance_km > 0:
        spec = SimpleRunSpec(kind=kind, distance_km=day.distance_km, pace_min_per_km=pace)
        spec = spec.model_copy(update=recalc(spec, CalcField.pace, pace))
        minutes = round(spec.duration_sec / 60) if spec.duration_sec else day.duration_minutes
        return NormalizedPlanDay(
            type=day.type,
            description=generator.generate_simple_run(spec),
            distance_km=day.distance_km,
            duration_minutes=minutes,
            pace=format_pace(pace) or None,
        )

    if day.notes and day.notes.strip():
        description = day.notes.strip()
    elif day.duration_minutes:
        spec = SimpleRunSpec(kind=kind, duration_sec=day.duration_minutes * 60, pace_min_per_km=pace)
        description = generator.generate_simple_run(spec)
    else:
        description = generator.kind_label(kind)
    return NormalizedPlanDay(
        type=day.type,
        description=description,
        duration_minutes=day.duration_minutes,
        pace=format_pace(pace) or None,
    )


def _interval(day: PlanDay, warmup_km: float, cooldown_km: float) -> NormalizedPlanDay:
    spec = IntervalSpec(
        warmup_km=day.warmup_km if day.warmup_km is not None else warmup_km,
        reps=day.reps,
        rep_distance_m=day.interval_m,
        rep_pace=day.interval_pace or None,
        rest_distance_m=day.rest_m,
        rest_kind=day.rest_type,
        cooldown_km=day.cooldown_km if day.cooldown_km is not None else cooldown_km,
    )
    return NormalizedPlanDay(
        type=day.type,
        description=generator.generate_interval(spec),
        distance_km=spec.total_distance_km,
        duration_minutes=day.duration_minutes,
    )


def _fartlek(day: PlanDay, warmup_km: float, cooldown_km: float) -> NormalizedPlanDay:
    segments = [
        FartlekSegment(
            id=i,
            reps=seg.reps,
            accel_distance_m=seg.distance_m,
            accel_pace=seg.pace or None,
            recovery_distance_m=seg.recovery_m,
            recovery_kind=seg.recovery_type,
        )
        for i, seg in enumerate(day.segments, start=1)
    ]
    spec = FartlekSpec(
        warmup_km=day.warmup_km if day.warmup_km is not None else warmup_km,
        segments=segments,
        cooldown_km=day.cooldown_km if day.cooldown_km is not None else cooldown_km,
    )
    return NormalizedPlanDay(
        type=day.type,
        description=generator.generate_fartlek(spec),
        distance_km=spec.total_distance_km,
        duration_minutes=day.duration_minutes,
    )


def _exercises(day: PlanDay, category: ExerciseCategory, library: list[LibraryExercise]) -> NormalizedPlanDay:
    if not day.exercises:
        # older plans only carry a free-text list
        selection = parse_exercises(day.notes, category, library)
        entries = selection.entries
        description = generator.generate_exercise_list(entries, category, library)
        return NormalizedPlanDay(
            type=day.type,
            description=description or (day.notes or "").strip(),
            exercises=entries,
        )

    entries = []
    for index, ex in enumerate(day.exercises):
        found = match_exercise(ex.name, library, ex.exercise_id)
        values = {
            "sets": ex.sets or None,
            "reps": ex.reps or None,
            "weight_kg": ex.weight_kg or None,
            "duration_sec": ex.duration_min * 60 if ex.duration_min else None,
        }
        if category is ExerciseCategory.sbu:
            values = {"distance_m": ex.distance_m or None, "duration_sec": values["duration_sec"]}
        entries.append(
            ExerciseEntry(
                id=str(found.id) if found else f"plan-{index}",
                name=found.name if found else ex.name,
                category=category,
                source_library_id=found.id if found else None,
                **values,
            )
        )
    return NormalizedPlanDay(
        type=day.type,
        description=generator.generate_exercise_list(entries, category, library),
        exercises=entries,
    )


def normalize_plan_day(
    day: PlanDay,
    library: Iterable[LibraryExercise] = (),
    warmup_km: Optional[float] = None,
    cooldown_km: Optional[float] = None,
) -> NormalizedPlanDay:
    """Render an AI plan day into its canonical description and totals."""
    warmup_km = settings.plan_default_warmup_km if warmup_km is None else warmup_km
    cooldown_km = settings.plan_default_cooldown_km if cooldown_km is None else cooldown_km

    if day.type in SIMPLE_RUN_TYPES:
        return _simple_run(day)
    if day.type is WorkoutType.interval:
        return _interval(day, warmup_km, cooldown_km)
    if day.type is WorkoutType.fartlek:
        return _fartlek(day, warmup_km, cooldown_km)

    category = category_for_type(day.type)
    if category is not WorkoutCategory.running:
        exercise_category = ExerciseCategory(category.value)
        return _exercises(day, exercise_category, library_for_category(library, exercise_category))

    logger.debug("Plan day of type %s has no description", day.type.value)
    return NormalizedPlanDay(type=day.type, description="")
