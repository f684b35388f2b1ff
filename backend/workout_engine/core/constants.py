"""Shared workout constants.

Closed vocabularies of the description format live here: workout kinds,
rest/recovery kinds, exercise categories and the Russian keywords the
canonical text uses for each of them. Generation and parsing both read
from these tables so a new kind only has to be added in one place.
"""

from enum import Enum


class WorkoutKind(str, Enum):
    easy = "easy"
    tempo = "tempo"
    long = "long"
    control = "control"
    race = "race"


class WorkoutType(str, Enum):
    """Every plan-day type the calendar knows about."""

    easy = "easy"
    tempo = "tempo"
    long = "long"
    long_run = "long-run"
    interval = "interval"
    fartlek = "fartlek"
    control = "control"
    race = "race"
    other = "other"
    sbu = "sbu"
    rest = "rest"
    free = "free"


class WorkoutCategory(str, Enum):
    running = "running"
    ofp = "ofp"
    sbu = "sbu"


class RestKind(str, Enum):
    jog = "jog"
    walk = "walk"
    rest = "rest"


class RecoveryKind(str, Enum):
    jog = "jog"
    walk = "walk"
    easy = "easy"


class ExerciseCategory(str, Enum):
    ofp = "ofp"
    sbu = "sbu"


class CalcField(str, Enum):
    distance = "distance"
    duration = "duration"
    pace = "pace"


# Labels that open a simple-run description
WORKOUT_KIND_LABELS = {
    WorkoutKind.easy: "Легкий бег",
    WorkoutKind.tempo: "Темповый бег",
    WorkoutKind.long: "Длительный бег",
    WorkoutKind.control: "Контрольный забег",
    WorkoutKind.race: "Соревнование",
}

REST_KIND_TEXT = {
    RestKind.jog: "трусцой",
    RestKind.walk: "ходьбой",
    RestKind.rest: "отдых",
}

RECOVERY_KIND_TEXT = {
    RecoveryKind.jog: "трусцой",
    RecoveryKind.walk: "ходьбой",
    RecoveryKind.easy: "легким бегом",
}

REST_KIND_BY_TEXT = {text: kind for kind, text in REST_KIND_TEXT.items()}
RECOVERY_KIND_BY_TEXT = {text: kind for kind, text in RECOVERY_KIND_TEXT.items()}

SIMPLE_RUN_TYPES = {
    WorkoutType.easy: WorkoutKind.easy,
    WorkoutType.tempo: WorkoutKind.tempo,
    WorkoutType.long: WorkoutKind.long,
    WorkoutType.long_run: WorkoutKind.long,
    WorkoutType.control: WorkoutKind.control,
    WorkoutType.race: WorkoutKind.race,
}

# Type names the AI planner uses besides the calendar's own
PLAN_TYPE_ALIASES = {
    "easy_run": WorkoutType.easy,
    "long_run": WorkoutType.long,
    "marathon": WorkoutType.long,
    "ofp": WorkoutType.other,
}

TYPE_TO_CATEGORY = {
    WorkoutType.other: WorkoutCategory.ofp,
    WorkoutType.sbu: WorkoutCategory.sbu,
}

# Library categories shown in each exercise calculator
LIBRARY_CATEGORIES = {
    ExerciseCategory.ofp: ("ofp", "other", "strength"),
    ExerciseCategory.sbu: ("sbu", "other"),
}

ACTIVITY_TYPE_LABELS = {
    "run": "Бег",
    "running": "Бег",
    "walking": "Ходьба",
    "hiking": "Поход",
    "cycling": "Велосипед",
    "swimming": "Плавание",
    "ofp": "ОФП",
    "sbu": "СБУ",
    "easy": "Легкий бег",
    "long": "Длительный бег",
    "long-run": "Длительный бег",
    "tempo": "Темповый бег",
    "interval": "Интервалы",
    "fartlek": "Фартлек",
    "race": "Соревнование",
    "control": "Контрольный забег",
    "other": "ОФП",
    "rest": "Отдых",
    "free": "Пустой день",
}

# Separators between an exercise name and its parameters
EXERCISE_SEPARATORS = ("—", " – ")

METERS_PER_KM = 1000


def category_for_type(workout_type: WorkoutType) -> WorkoutCategory:
    """Calendar category a plan-day type belongs to (running unless ofp/sbu)."""
    return TYPE_TO_CATEGORY.get(workout_type, WorkoutCategory.running)


def get_activity_type_label(activity_type: str | None) -> str:
    """Human label for an activity/plan type, falling back to the raw value."""
    if not activity_type:
        return ""
    key = getattr(activity_type, "value", activity_type).lower().strip()
    return ACTIVITY_TYPE_LABELS.get(key, activity_type)


def normalize_plan_type(value) -> WorkoutType:
    """Plan-day type from planner output: aliases resolved, anything unknown is a rest day."""
    if isinstance(value, WorkoutType):
        return value
    key = str(value or "").strip().lower()
    if key in PLAN_TYPE_ALIASES:
        return PLAN_TYPE_ALIASES[key]
    try:
        return WorkoutType(key)
    except ValueError:
        return WorkoutType.rest
