"""Distance / duration / pace calculator for simple runs.

Changing one leg recomputes exactly one other leg:

    pace changed      -> duration recomputed, distance kept
    distance changed  -> duration recomputed, pace kept
    duration changed  -> pace recomputed, distance kept

Distance is the planning anchor and is never derived.
"""

import logging
from typing import Any

from workout_engine.core.constants import CalcField
from workout_engine.core.time_utils import parse_duration, parse_number, parse_pace
from workout_engine.schemas.workout import SimpleRunSpec

logger = logging.getLogger(__name__)


def duration_from_pace(distance_km: float, pace_min_per_km: float) -> int:
    return int(round(distance_km * pace_min_per_km * 60))


def pace_from_duration(duration_sec: int, distance_km: float) -> float:
    return duration_sec / 60 / distance_km


def _coerce(field: CalcField, value: Any):
    """Accept either typed text from a calculator field or an already-parsed number."""
    if value is None:
        return None
    if isinstance(value, str):
        if field is CalcField.distance:
            value = parse_number(value)
        elif field is CalcField.duration:
            value = parse_duration(value)
        else:
            value = parse_pace(value)
        if value is None:
            return None
    # distance and duration are never negative; durations are whole seconds
    if value < 0:
        return None
    if field is CalcField.duration:
        return int(round(value))
    return value


def _positive(value) -> bool:
    return value is not None and value > 0


def recalc(spec: SimpleRunSpec, changed_field: CalcField | str, new_value: Any = None) -> dict:
    """
    Return the partial update produced by editing `changed_field`.

    The result holds at most one key (`duration_sec` or `pace_min_per_km`).
    It is empty when the two inputs the derived leg needs are not both
    present and positive; existing values then stay as they are.
    """
    field = CalcField(changed_field)
    distance = spec.distance_km
    duration = spec.duration_sec
    pace = spec.pace_min_per_km
    if field is CalcField.distance:
        distance = _coerce(field, new_value)
    elif field is CalcField.duration:
        duration = _coerce(field, new_value)
    else:
        pace = _coerce(field, new_value)

    if field in (CalcField.pace, CalcField.distance):
        if _positive(distance) and _positive(pace):
            return {"duration_sec": duration_from_pace(distance, pace)}
    elif _positive(distance) and _positive(duration):
        return {"pace_min_per_km": pace_from_duration(duration, distance)}

    logger.debug("No recalculation for %s change (distance=%s duration=%s pace=%s)",
                 field.value, distance, duration, pace)
    return {}


_FIELD_ATTRS = {
    CalcField.distance: "distance_km",
    CalcField.duration: "duration_sec",
    CalcField.pace: "pace_min_per_km",
}


def apply_change(spec: SimpleRunSpec, changed_field: CalcField | str, new_value: Any = None) -> SimpleRunSpec:
    """Store the edited leg on a copy of `spec` and merge the recalculated one."""
    field = CalcField(changed_field)
    value = _coerce(field, new_value)
    if field is CalcField.pace and value is not None and value <= 0:
        value = None
    update = {_FIELD_ATTRS[field]: value}
    update.update(recalc(spec, field, new_value))
    return spec.model_copy(update=update)
