"""Read structured calculator fields back out of a workout description.

Used when a stored (or AI-written) workout is opened for editing. Parsing
is best effort: each field has an ordered list of patterns, the first one
that yields a value wins, and a field nobody matches simply stays unset.
Nothing in here raises on odd text; the user fixes whatever was missed in
the pre-filled calculator.
"""

import logging
import re
from typing import Callable, Iterable, NamedTuple, Optional

from workout_engine.core.constants import (
    CalcField,
    ExerciseCategory,
    RecoveryKind,
    RestKind,
    WorkoutKind,
    EXERCISE_SEPARATORS,
    RECOVERY_KIND_BY_TEXT,
    REST_KIND_BY_TEXT,
    WORKOUT_KIND_LABELS,
    METERS_PER_KM,
)
from workout_engine.core.time_utils import parse_count, parse_duration, parse_number, parse_pace
from workout_engine.schemas.workout import (
    ExerciseEntry,
    ExerciseRecord,
    ExerciseSelection,
    FartlekSegment,
    FartlekSpec,
    IntervalSpec,
    LibraryExercise,
    SimpleRunSpec,
)
from workout_engine.services.calculator import recalc
from workout_engine.services.matcher import match_exercise

logger = logging.getLogger(__name__)

FLAGS = re.IGNORECASE

PACE = r"(\d{1,2}:\d{2})"
DURATION = r"(\d{1,2}:\d{2}(?::\d{2})?)"
DECIMAL = r"([\d.,]+)"
# meters unit not followed by another letter ('м' but not 'мин')
METERS = r"\s*м(?![а-яё])"
TIMES = r"\s*[×x]\s*"
# rest of a block up to its closing '. ' (decimal points don't end it)
IN_BLOCK = r"(?:[^.]|\.(?=\d))*?"


class FieldRule(NamedTuple):
    """Ordered patterns for one field and how to turn a match into values."""

    name: str
    patterns: tuple
    extract: Callable[[re.Match], dict]


def _rule(name: str, patterns: Iterable[str], extract: Callable[[re.Match], dict]) -> FieldRule:
    return FieldRule(name, tuple(re.compile(p, FLAGS) for p in patterns), extract)


def _present(values: dict) -> dict:
    return {k: v for k, v in values.items() if v is not None}


def apply_rules(rules: Iterable[FieldRule], text: str) -> dict:
    """Run every rule against `text` and collect the values that were found."""
    found = {}
    for rule in rules:
        for pattern in rule.patterns:
            m = pattern.search(text)
            if not m:
                continue
            values = _present(rule.extract(m))
            if values:
                found.update(values)
                break
        else:
            logger.debug("Description has no %s", rule.name)
    return found


def strip_markup(text: Optional[str]) -> str:
    """Drop inline HTML other producers put into descriptions."""
    if not text:
        return ""
    text = re.sub(r"<br\s*/?>", "\n", str(text), flags=FLAGS)
    return re.sub(r"<[^>]*>", " ", text).strip()


def _km(group: Optional[str]) -> Optional[float]:
    value = parse_number(group)
    return value if value is not None and value >= 0 else None


def _pace_text(group: Optional[str]) -> Optional[str]:
    return group if group and parse_pace(group) is not None else None


def _kind_text(group: Optional[str]) -> str:
    return (group or "").lower().replace("ё", "е")


# --- simple run ---

SIMPLE_RUN_RULES = (
    _rule(
        "distance",
        [r"(?<![\d:])" + DECIMAL + r"\s*км"],
        lambda m: {"distance_km": _km(m.group(1))},
    ),
    _rule(
        "duration",
        [r"или\s+" + DURATION],
        lambda m: {"duration_sec": parse_duration(m.group(1))},
    ),
    _rule(
        "pace",
        [
            r"темп[:\s~]*" + PACE + r"(?:\s*/?\s*км)?",
            r"(?:^|[(\s])" + PACE + r"\s*/\s*км",
        ],
        lambda m: {"pace_min_per_km": parse_pace(m.group(1)) or None},
    ),
    _rule(
        "heart rate",
        [r"пульс[:\s]+(\d+)"],
        lambda m: {"heart_rate_text": m.group(1)},
    ),
)


def detect_kind(text: str) -> Optional[WorkoutKind]:
    """Workout kind whose label opens the description, if any."""
    lowered = text.lower().replace("ё", "е")
    for kind, label in WORKOUT_KIND_LABELS.items():
        if lowered.startswith(label.lower()):
            return kind
    return None


def parse_simple_run(text: Optional[str], kind: Optional[WorkoutKind] = None) -> SimpleRunSpec:
    """
    'Темповый бег: 10 км или 45:00, темп 4:30, пульс 150' -> SimpleRunSpec.

    When distance and pace are found but no explicit duration, the duration
    is derived from them.
    """
    raw = strip_markup(text)
    if kind is None:
        kind = detect_kind(raw) or WorkoutKind.easy
    spec = SimpleRunSpec(kind=kind, **apply_rules(SIMPLE_RUN_RULES, raw))
    if spec.duration_sec is None and spec.pace_min_per_km is not None:
        spec = spec.model_copy(update=recalc(spec, CalcField.pace, spec.pace_min_per_km))
    return spec


# --- intervals ---

def _edge_rules(title: str, field: str) -> tuple:
    return (
        _rule(
            f"{field} distance",
            [title + r"[:\s]*" + DECIMAL + r"\s*км"],
            lambda m: {f"{field}_km": _km(m.group(1))},
        ),
        _rule(
            f"{field} pace",
            [
                title + IN_BLOCK + r"в темпе\s+" + PACE,
                title + IN_BLOCK + r"\(" + PACE + r"\)",
            ],
            lambda m: {f"{field}_pace": _pace_text(m.group(1))},
        ),
    )


SERIES = r"(\d+)" + TIMES + r"(\d+)" + METERS

INTERVAL_RULES = (
    *_edge_rules("Разминка", "warmup"),
    _rule(
        "series",
        [SERIES],
        lambda m: {"reps": parse_count(m.group(1)), "rep_distance_m": parse_count(m.group(2))},
    ),
    _rule(
        "series pace",
        [
            r"\d+" + TIMES + r"\d+" + METERS + r"\s*в темпе\s+" + PACE,
            r"\d+" + TIMES + r"\d+" + METERS + r"\s*\(" + PACE + r"\)",
        ],
        lambda m: {"rep_pace": _pace_text(m.group(1))},
    ),
    _rule(
        "rest",
        [
            r"пауза\s+(\d+)" + METERS + r"\s+(трусцой|ходьбой|отдых)",
            r"отдых\s+(\d+)" + METERS + r"\s+(трусцой|ходьбой)",
        ],
        lambda m: {
            "rest_distance_m": parse_count(m.group(1)),
            "rest_kind": REST_KIND_BY_TEXT.get(_kind_text(m.group(2)), RestKind.jog),
        },
    ),
    *_edge_rules("Заминка", "cooldown"),
)


def parse_interval(text: Optional[str]) -> IntervalSpec:
    """'Разминка: 2 км. 5×1000м в темпе 4:00, пауза 400м трусцой. Заминка: 2 км'"""
    return IntervalSpec(**apply_rules(INTERVAL_RULES, strip_markup(text)))


# --- fartlek ---

FARTLEK_RULES = (
    _edge_rules("Разминка", "warmup")[0],
    _edge_rules("Заминка", "cooldown")[0],
)

SEGMENT_PATTERN = re.compile(
    SERIES
    + r"\s*(?:в темпе\s+" + PACE + r")?"
    + r"\s*,?\s*(?:восстановление\s+(\d+)" + METERS + r"\s+(трусцой|ходьбой|л[её]гким бегом))?",
    FLAGS,
)


def _segment(index: int, m: re.Match) -> FartlekSegment:
    return FartlekSegment(
        id=index,
        reps=parse_count(m.group(1)),
        accel_distance_m=parse_count(m.group(2)),
        accel_pace=_pace_text(m.group(3)),
        recovery_distance_m=parse_count(m.group(4)),
        recovery_kind=RECOVERY_KIND_BY_TEXT.get(_kind_text(m.group(5)), RecoveryKind.jog),
    )


def parse_fartlek(text: Optional[str]) -> FartlekSpec:
    """
    Warmup/cooldown plus one segment per '<reps>×<m>м ...' clause, in text order.

    Without any segment match the spec keeps its single empty segment.
    """
    raw = strip_markup(text)
    spec = FartlekSpec(**apply_rules(FARTLEK_RULES, raw))
    segments = [_segment(i, m) for i, m in enumerate(SEGMENT_PATTERN.finditer(raw), start=1)]
    if segments:
        spec.segments = segments
    else:
        logger.debug("Description has no fartlek segments")
    return spec


# --- exercises ---

def _meters(m: re.Match) -> Optional[int]:
    num = parse_number(m.group(1))
    if num is None:
        return None
    meters = round(num * METERS_PER_KM) if m.group(2).lower() == "км" else round(num)
    return meters if meters > 0 else None


def _weight(m: re.Match) -> Optional[float]:
    value = parse_number(m.group(1))
    return value if value is not None and value >= 0 else None


DURATION_RULE = _rule(
    "duration",
    [r"(\d+)\s*мин(?:\s*(\d+)\s*сек)?", r"(\d+)\s*сек"],
    lambda m: {
        "duration_sec": (
            int(m.group(1)) * 60 + int(m.group(2) or 0)
            if "мин" in m.group(0).lower()
            else int(m.group(1))
        )
    },
)

EXERCISE_RULES = {
    ExerciseCategory.ofp: (
        _rule(
            "sets and reps",
            [r"(\d+)" + TIMES + r"(\d+)"],
            lambda m: {"sets": int(m.group(1)), "reps": int(m.group(2))},
        ),
        _rule("weight", [DECIMAL + r"\s*кг"], lambda m: {"weight_kg": _weight(m)}),
        DURATION_RULE,
    ),
    ExerciseCategory.sbu: (
        _rule("distance", [DECIMAL + r"\s*(км|м)(?![а-яё])"], lambda m: {"distance_m": _meters(m)}),
        DURATION_RULE,
    ),
}

# fields a library entry may override, per category
OVERRIDE_FIELDS = {
    ExerciseCategory.ofp: ("sets", "reps", "weight_kg", "duration_sec"),
    ExerciseCategory.sbu: ("distance_m", "duration_sec"),
}

PARAGRAPH_SETS = (
    re.compile(r"\s*\((\d+)\s*подход\w*\s*по\s*(\d+)\s*повтор\w*\)\s*$", FLAGS),
    re.compile(r"\s*\((\d+)" + TIMES + r"(\d+)\)\s*$", FLAGS),
)


def split_exercise_line(line: str) -> tuple[str, str]:
    """'Выпады — 3×12, 10 кг' -> ('Выпады', '3×12, 10 кг')."""
    for sep in EXERCISE_SEPARATORS:
        if sep in line:
            name, rest = line.split(sep, 1)
            return name.strip(), rest.strip()
    return line.strip(), ""


def _add_exercise(
    selection: ExerciseSelection,
    name: str,
    values: dict,
    library: list[LibraryExercise],
    custom_id: str,
    exercise_id: Optional[int] = None,
) -> None:
    category = selection.category
    values = {k: v for k, v in values.items() if k in OVERRIDE_FIELDS[category]}
    found = match_exercise(name, library, exercise_id)
    if found is None:
        if name:
            selection.custom_entries.append(
                ExerciseEntry(id=custom_id, name=name, category=category, **values)
            )
        return

    for i, entry in enumerate(selection.library_entries):
        if entry.source_library_id == found.id:
            selection.library_entries[i] = entry.model_copy(update=values)
            return
    selection.library_entries.append(
        ExerciseEntry(
            id=str(found.id),
            name=found.name,
            category=category,
            source_library_id=found.id,
            **values,
        )
    )


def _record_value(value):
    # stored rows may carry zeros or junk; only positive numbers override
    return value if value is not None and value > 0 else None


def _record_values(record: ExerciseRecord) -> dict:
    values = {
        "sets": _record_value(record.sets),
        "reps": _record_value(record.reps),
        "weight_kg": _record_value(record.weight_kg),
        "distance_m": _record_value(record.distance_m),
        "duration_sec": _record_value(record.duration_sec),
    }
    return _present(values)


def _split_paragraph(line: str) -> Optional[list[tuple[str, dict]]]:
    """'Силовые: приседания, выпады и тяга (3 подхода по 12 повторений)' -> names sharing sets/reps."""
    values = {}
    for pattern in PARAGRAPH_SETS:
        m = pattern.search(line)
        if m:
            values = {"sets": int(m.group(1)), "reps": int(m.group(2))}
            line = line[: m.start()].strip()
            break
    head, colon, tail = line.partition(":")
    if colon and head.strip() and tail.strip():
        line = tail.strip()
    names = [n.strip() for n in re.split(r"\s*,\s*|\s+и\s+", line) if n.strip()]
    return [(name, dict(values)) for name in names] or None


def parse_exercises(
    text: Optional[str],
    category: ExerciseCategory,
    library: Iterable[LibraryExercise] = (),
    records: Optional[Iterable[ExerciseRecord]] = None,
) -> ExerciseSelection:
    """
    Rebuild an exercise selection for editing.

    Structured `records` win over the free text. Otherwise each line is
    split on the dash into name and parameters; the name is matched
    against `library` and the parameters become overrides (library hit)
    or the custom entry's own values.
    """
    category = ExerciseCategory(category)
    library = list(library)
    selection = ExerciseSelection(category=category)

    records = list(records or [])
    if records:
        for record in records:
            index = record.order_index if record.order_index is not None else len(selection.custom_entries)
            _add_exercise(
                selection,
                record.name.strip(),
                _record_values(record),
                library,
                custom_id=f"custom-edit-{index}",
                exercise_id=record.exercise_id,
            )
        return selection

    lines = [line.strip() for line in strip_markup(text).splitlines() if line.strip()]
    if (
        category is ExerciseCategory.ofp
        and len(lines) == 1
        and not any(sep.strip() in lines[0] for sep in EXERCISE_SEPARATORS)
    ):
        items = _split_paragraph(lines[0])
        if items:
            for index, (name, values) in enumerate(items):
                _add_exercise(selection, name, values, library, custom_id=f"custom-edit-{index}")
            return selection

    for index, line in enumerate(lines):
        name, rest = split_exercise_line(line)
        values = apply_rules(EXERCISE_RULES[category], rest) if rest else {}
        _add_exercise(selection, name, values, library, custom_id=f"custom-edit-{index}")
    return selection
