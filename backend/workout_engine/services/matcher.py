"""Resolve exercise names against the exercise library.

The AI planner, the library and hand edits often spell the same exercise
slightly differently ('Приседания' vs 'приседания со штангой'), so matching
falls back from id to exact name to a prefix in either direction. No match
means the line is a custom exercise.
"""

import logging
from typing import Iterable, Optional

from workout_engine.core.constants import ExerciseCategory, LIBRARY_CATEGORIES
from workout_engine.schemas.workout import LibraryExercise

logger = logging.getLogger(__name__)


def normalize_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def match_exercise(
    candidate_name: Optional[str],
    library: Iterable[LibraryExercise],
    exercise_id: Optional[int] = None,
) -> Optional[LibraryExercise]:
    """
    Find the library exercise for a name (and optional id).

    Order: exact id, then case-insensitive trimmed name equality, then a
    prefix match in either direction. The first hit in library order wins.
    """
    library = list(library)
    if exercise_id is not None:
        for ex in library:
            if ex.id == exercise_id:
                return ex

    candidate = normalize_name(candidate_name)
    if not candidate:
        return None

    for ex in library:
        if normalize_name(ex.name) == candidate:
            return ex

    for ex in library:
        lib_name = normalize_name(ex.name)
        if not lib_name:
            continue
        if candidate.startswith(lib_name) or lib_name.startswith(candidate):
            return ex

    logger.debug("No library exercise for %r", candidate_name)
    return None


def library_for_category(
    library: Iterable[LibraryExercise],
    category: ExerciseCategory,
) -> list[LibraryExercise]:
    """Library exercises offered in the ofp or sbu calculator."""
    allowed = LIBRARY_CATEGORIES[ExerciseCategory(category)]
    return [ex for ex in library if normalize_name(ex.category) in allowed]
