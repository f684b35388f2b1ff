from workout_engine.core.constants import ExerciseCategory
from workout_engine.schemas.workout import LibraryExercise
from workout_engine.services.matcher import library_for_category, match_exercise


LIBRARY = [
    LibraryExercise(id=1, name="Приседания", category="ofp"),
    LibraryExercise(id=2, name="Приседания со штангой", category="strength"),
    LibraryExercise(id=3, name="Планка боковая", category="other"),
    LibraryExercise(id=4, name="Многоскоки", category="sbu"),
    LibraryExercise(id=5, name="  ", category="ofp"),
]


def test_prefix_match_library_name_shorter():
    library = [LibraryExercise(id=1, name="Приседания")]
    found = match_exercise("приседания со штангой", library)
    assert found is not None and found.id == 1


def test_exact_name_beats_earlier_prefix():
    found = match_exercise("  ПРИСЕДАНИЯ СО ШТАНГОЙ ", LIBRARY)
    assert found.id == 2


def test_prefix_match_candidate_shorter():
    assert match_exercise("планка", LIBRARY).id == 3


def test_id_match_wins():
    assert match_exercise("Многоскоки", LIBRARY, exercise_id=1).id == 1
    # unknown id falls back to the name
    assert match_exercise("Многоскоки", LIBRARY, exercise_id=99).id == 4


def test_no_match_means_custom():
    assert match_exercise("Берпи", LIBRARY) is None
    assert match_exercise("", LIBRARY) is None
    assert match_exercise(None, LIBRARY) is None
    assert match_exercise("Приседания", []) is None


def test_library_for_category():
    assert [e.id for e in library_for_category(LIBRARY, ExerciseCategory.ofp)] == [1, 2, 3, 5]
    assert [e.id for e in library_for_category(LIBRARY, "sbu")] == [3, 4]
