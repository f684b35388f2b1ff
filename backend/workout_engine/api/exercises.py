from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from workout_engine.core.constants import ExerciseCategory
from workout_engine.library import get_library
from workout_engine.schemas.workout import LibraryExercise
from workout_engine.services.matcher import library_for_category, match_exercise


router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("/", response_model=list[LibraryExercise])
def list_exercises(
    category: Optional[ExerciseCategory] = Query(None),
    library: list[LibraryExercise] = Depends(get_library),
):
    """
    Library exercises, optionally only those the ofp or sbu calculator offers.

      GET /exercises?category=sbu
    """
    if category is None:
        return library
    return library_for_category(library, category)


@router.get("/match", response_model=Optional[LibraryExercise])
def match_exercise_name(
    name: str = Query(...),
    category: Optional[ExerciseCategory] = Query(None),
    library: list[LibraryExercise] = Depends(get_library),
):
    if category is not None:
        library = library_for_category(library, category)
    return match_exercise(name, library)


@router.get("/{exercise_id}", response_model=LibraryExercise)
def get_exercise(exercise_id: int, library: list[LibraryExercise] = Depends(get_library)):
    for ex in library:
        if ex.id == exercise_id:
            return ex
    raise HTTPException(status_code=404, detail="Exercise not found")
