import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from workout_engine.core.config import settings
from workout_engine.schemas.workout import LibraryExercise

logger = logging.getLogger(__name__)


def load_library(path: str | None) -> list[LibraryExercise]:
    """Read the exercise library JSON file. Missing or broken files give an empty library."""
    if not path:
        return []
    p = Path(path).expanduser()
    if not p.is_file():
        logger.warning("Exercise library %s not found, using an empty library", p)
        return []
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            raw = raw.get("exercises", [])
        exercises = [LibraryExercise.model_validate(item) for item in raw]
    except (OSError, ValueError, TypeError, ValidationError) as e:
        logger.warning("Could not read exercise library %s: %s", p, e)
        return []
    logger.info("Loaded %d library exercises from %s", len(exercises), p)
    return exercises


@lru_cache(maxsize=None)
def _cached_library(path: str | None) -> tuple[LibraryExercise, ...]:
    return tuple(load_library(path))


# Dependency we will use in FastAPI routes; the file is read once per path
def get_library() -> list[LibraryExercise]:
    return list(_cached_library(settings.exercise_library_path))
