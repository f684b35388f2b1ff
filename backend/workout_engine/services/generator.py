"""Canonical workout descriptions.

The text produced here is what gets stored and shown in the calendar, and
the AI planner writes the same grammar, so every function is pure and
byte-stable for equal input. A part is left out entirely when its data
is missing; nothing is ever rendered as a placeholder.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from workout_engine.core.constants import (
    ExerciseCategory,
    RecoveryKind,
    RestKind,
    WorkoutKind,
    RECOVERY_KIND_TEXT,
    REST_KIND_TEXT,
    WORKOUT_KIND_LABELS,
    METERS_PER_KM,
)
from workout_engine.core.time_utils import format_duration, format_number, format_pace
from workout_engine.schemas.workout import (
    ExerciseEntry,
    FartlekSegment,
    FartlekSpec,
    IntervalSpec,
    LibraryExercise,
    SimpleRunSpec,
)

BLOCK_SEP = ". "
ATTR_SEP = ", "
LINE_SEP = "\n"
TIMES = "×"
DASH = " — "


def kind_label(kind: WorkoutKind) -> str:
    return WORKOUT_KIND_LABELS[WorkoutKind(kind)]


def rest_kind_text(kind: RestKind) -> str:
    return REST_KIND_TEXT[RestKind(kind)]


def recovery_kind_text(kind: RecoveryKind) -> str:
    return RECOVERY_KIND_TEXT[RecoveryKind(kind)]


def generate_simple_run(spec: SimpleRunSpec) -> str:
    """'Темповый бег: 10 км или 45:00, темп 4:30, пульс 150'"""
    text = kind_label(spec.kind)
    has_distance = spec.distance_km is not None and spec.distance_km > 0
    has_duration = spec.duration_sec is not None and spec.duration_sec > 0
    if has_distance or has_duration:
        text += ": "
        if has_distance:
            text += f"{format_number(spec.distance_km)} км"
        if has_duration:
            text += (" или " if has_distance else "") + format_duration(spec.duration_sec)
    pace = format_pace(spec.pace_min_per_km)
    if pace:
        text += f"{ATTR_SEP}темп {pace}"
    if spec.heart_rate_text and spec.heart_rate_text.strip():
        text += f"{ATTR_SEP}пульс {spec.heart_rate_text.strip()}"
    return text


def _edge_block(title: str, km: Optional[float], pace: Optional[str]) -> Optional[str]:
    """Warmup/cooldown block: 'Разминка: 2 км в темпе 5:30'."""
    if not km and not pace:
        return None
    block = f"{title}: "
    if km:
        block += f"{format_number(km)} км"
    if pace:
        block += f" в темпе {pace}"
    return block


def _series(reps: int, distance_m: Optional[int], pace: Optional[str]) -> str:
    text = f"{reps}{TIMES}"
    if distance_m:
        text += f"{distance_m}м"
    if pace:
        text += f" в темпе {pace}"
    return text


def generate_interval(spec: IntervalSpec) -> str:
    """'Разминка: 2 км. 5×1000м в темпе 4:00, пауза 400м трусцой. Заминка: 2 км'"""
    blocks = []
    warmup = _edge_block("Разминка", spec.warmup_km, spec.warmup_pace)
    if warmup:
        blocks.append(warmup)
    if spec.reps:
        main = _series(spec.reps, spec.rep_distance_m, spec.rep_pace)
        if spec.rest_distance_m:
            main += f"{ATTR_SEP}пауза {spec.rest_distance_m}м {rest_kind_text(spec.rest_kind)}"
        blocks.append(main)
    cooldown = _edge_block("Заминка", spec.cooldown_km, spec.cooldown_pace)
    if cooldown:
        blocks.append(cooldown)
    return BLOCK_SEP.join(blocks)


def _segment_clause(segment: FartlekSegment) -> str:
    clause = _series(segment.reps, segment.accel_distance_m, segment.accel_pace)
    if segment.recovery_distance_m:
        clause += (
            f"{ATTR_SEP}восстановление {segment.recovery_distance_m}м "
            f"{recovery_kind_text(segment.recovery_kind)}"
        )
    return clause


def generate_fartlek(spec: FartlekSpec) -> str:
    """Warmup, one clause per segment in list order, cooldown."""
    blocks = []
    if spec.warmup_km:
        blocks.append(f"Разминка: {format_number(spec.warmup_km)} км")
    # segments without reps are still being filled in
    blocks.extend(_segment_clause(seg) for seg in spec.segments if seg.reps)
    if spec.cooldown_km:
        blocks.append(f"Заминка: {format_number(spec.cooldown_km)} км")
    return BLOCK_SEP.join(blocks)


def format_exercise_distance(distance_m: int) -> str:
    if distance_m >= METERS_PER_KM:
        km = (Decimal(distance_m) / METERS_PER_KM).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{km} км"
    return f"{distance_m} м"


def format_exercise_duration(duration_sec: int) -> str:
    minutes, seconds = divmod(duration_sec, 60)
    if minutes > 0:
        return f"{minutes} мин {seconds} сек"
    return f"{seconds} сек"


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _exercise_line(
    entry: ExerciseEntry,
    category: ExerciseCategory,
    defaults: Optional[LibraryExercise] = None,
) -> str:
    parts = []
    if category is ExerciseCategory.ofp:
        sets = _first_set(entry.sets, defaults.default_sets if defaults else None)
        reps = _first_set(entry.reps, defaults.default_reps if defaults else None)
        if sets is not None and reps is not None:
            parts.append(f"{sets}{TIMES}{reps}")
        if entry.weight_kg is not None and entry.weight_kg > 0:
            parts.append(f"{format_number(entry.weight_kg)} кг")
    else:
        distance = _first_set(entry.distance_m, defaults.default_distance_m if defaults else None)
        if distance is not None and distance > 0:
            parts.append(format_exercise_distance(distance))
    if not parts:
        duration = _first_set(entry.duration_sec, defaults.default_duration_sec if defaults else None)
        if duration:
            parts.append(format_exercise_duration(duration))

    line = entry.name.strip() or (defaults.name.strip() if defaults else "")
    if parts:
        line += DASH + ATTR_SEP.join(parts)
    return line


def generate_exercise_list(
    entries: Iterable[ExerciseEntry],
    category: ExerciseCategory,
    library: Iterable[LibraryExercise] = (),
) -> str:
    """One line per exercise: library lines first, then custom lines."""
    category = ExerciseCategory(category)
    by_id = {ex.id: ex for ex in library}
    entries = list(entries)
    library_lines = [
        _exercise_line(e, category, by_id.get(e.source_library_id))
        for e in entries
        if e.is_library
    ]
    custom_lines = [_exercise_line(e, category) for e in entries if not e.is_library]
    return LINE_SEP.join(library_lines + custom_lines)
