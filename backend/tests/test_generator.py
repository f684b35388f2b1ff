import pytest

from workout_engine.core.constants import ExerciseCategory, RecoveryKind, RestKind, WorkoutKind
from workout_engine.schemas.workout import (
    ExerciseEntry,
    FartlekSegment,
    FartlekSpec,
    IntervalSpec,
    LibraryExercise,
    SimpleRunSpec,
)
from workout_engine.services.generator import (
    format_exercise_distance,
    generate_exercise_list,
    generate_fartlek,
    generate_interval,
    generate_simple_run,
)


def test_simple_run_label_only():
    assert generate_simple_run(SimpleRunSpec(kind=WorkoutKind.easy)) == "Легкий бег"


def test_simple_run_all_parts():
    spec = SimpleRunSpec(
        kind=WorkoutKind.tempo,
        distance_km=10,
        duration_sec=2700,
        pace_min_per_km=4.5,
        heart_rate_text="150",
    )
    assert generate_simple_run(spec) == "Темповый бег: 10 км или 45:00, темп 4:30, пульс 150"


def test_simple_run_partial_parts():
    assert (
        generate_simple_run(SimpleRunSpec(kind=WorkoutKind.long, pace_min_per_km=5.0))
        == "Длительный бег, темп 5:00"
    )
    assert generate_simple_run(SimpleRunSpec(kind=WorkoutKind.race, duration_sec=3930)) == "Соревнование: 1:05:30"
    assert (
        generate_simple_run(SimpleRunSpec(kind=WorkoutKind.control, distance_km=3.5))
        == "Контрольный забег: 3.5 км"
    )


def test_interval_all_blocks():
    spec = IntervalSpec(
        warmup_km=2,
        warmup_pace="5:30",
        reps=5,
        rep_distance_m=1000,
        rep_pace="4:00",
        rest_distance_m=400,
        rest_kind=RestKind.walk,
        cooldown_km=1.5,
    )
    assert generate_interval(spec) == (
        "Разминка: 2 км в темпе 5:30. 5×1000м в темпе 4:00, пауза 400м ходьбой. Заминка: 1.5 км"
    )


def test_interval_skips_missing_blocks():
    assert generate_interval(IntervalSpec()) == ""
    assert generate_interval(IntervalSpec(reps=10, rep_distance_m=200)) == "10×200м"
    assert generate_interval(IntervalSpec(cooldown_km=2, rest_distance_m=400)) == "Заминка: 2 км"


def test_interval_total_distance():
    spec = IntervalSpec(warmup_km=2, reps=5, rep_distance_m=1000, rest_distance_m=400, cooldown_km=2)
    assert spec.total_distance_km == pytest.approx(11.0)
    assert IntervalSpec().total_distance_km is None


def test_fartlek_segments_in_order():
    spec = FartlekSpec(
        warmup_km=2,
        segments=[
            FartlekSegment(id=1, reps=4, accel_distance_m=200, accel_pace="4:00", recovery_distance_m=200),
            FartlekSegment(id=2, reps=3, accel_distance_m=300, recovery_distance_m=100,
                           recovery_kind=RecoveryKind.easy),
            FartlekSegment(id=3),
        ],
        cooldown_km=1,
    )
    assert generate_fartlek(spec) == (
        "Разминка: 2 км. 4×200м в темпе 4:00, восстановление 200м трусцой. "
        "3×300м, восстановление 100м легким бегом. Заминка: 1 км"
    )
    assert spec.total_distance_km == pytest.approx(2 + 1.6 + 1.2 + 1)


def test_fartlek_segment_editing_keeps_ids():
    spec = FartlekSpec()
    second = spec.add_segment(reps=2, accel_distance_m=400)
    third = spec.add_segment(reps=6, accel_distance_m=100)
    assert (second.id, third.id) == (2, 3)
    spec.remove_segment(1)
    spec.update_segment(3, accel_pace="3:40")
    assert generate_fartlek(spec) == "2×400м. 6×100м в темпе 3:40"
    assert FartlekSpec().total_distance_km is None


LIBRARY = [
    LibraryExercise(id=1, name="Приседания", category="ofp", default_sets=3, default_reps=15),
    LibraryExercise(id=2, name="Планка", category="ofp", default_duration_sec=90),
    LibraryExercise(id=3, name="Многоскоки", category="sbu", default_distance_m=50),
]


def test_exercise_list_ofp_library_first():
    entries = [
        ExerciseEntry(id="custom-1", name="Выпады", sets=3, reps=12, weight_kg=10),
        ExerciseEntry(id="1", name="Приседания", weight_kg=20, source_library_id=1),
        ExerciseEntry(id="2", name="Планка", source_library_id=2),
    ]
    assert generate_exercise_list(entries, ExerciseCategory.ofp, LIBRARY) == (
        "Приседания — 3×15, 20 кг\nПланка — 1 мин 30 сек\nВыпады — 3×12, 10 кг"
    )


def test_exercise_list_overrides_win_over_defaults():
    entries = [ExerciseEntry(id="1", name="Приседания", sets=5, reps=5, weight_kg=62.5, source_library_id=1)]
    assert generate_exercise_list(entries, "ofp", LIBRARY) == "Приседания — 5×5, 62.5 кг"


def test_exercise_list_sbu_distances():
    entries = [
        ExerciseEntry(id="3", name="Многоскоки", category=ExerciseCategory.sbu, source_library_id=3),
        ExerciseEntry(id="c1", name="Бег в гору", category=ExerciseCategory.sbu, distance_m=1500),
        ExerciseEntry(id="c2", name="Захлёст голени", category=ExerciseCategory.sbu, duration_sec=45),
        ExerciseEntry(id="c3", name="Скиппинг", category=ExerciseCategory.sbu),
    ]
    assert generate_exercise_list(entries, ExerciseCategory.sbu, LIBRARY) == (
        "Многоскоки — 50 м\nБег в гору — 1.5 км\nЗахлёст голени — 45 сек\nСкиппинг"
    )


def test_exercise_list_empty():
    assert generate_exercise_list([], ExerciseCategory.ofp) == ""


@pytest.mark.parametrize(
    "meters, text",
    [(999, "999 м"), (1000, "1.0 км"), (1249, "1.2 км"), (1250, "1.3 км"), (2250, "2.3 км"), (3250, "3.3 км")],
)
def test_exercise_distance_rounds_half_up(meters, text):
    assert format_exercise_distance(meters) == text
