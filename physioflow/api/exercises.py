"""
Exercise catalog endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from physioflow.database import ExerciseRepository
from physioflow.database.schemas import Exercise, ExerciseCreate, ExerciseUpdate
from physioflow.api.utils import get_exercise_repository, require_id

router = APIRouter(tags=["exercises"])


@router.get("/exercises", response_model=List[Exercise], response_model_exclude_none=True)
async def list_exercises(exercises: ExerciseRepository = Depends(get_exercise_repository)):
    """
    Full catalog in insertion order
    """
    return exercises.list()


@router.get("/exercises/{exercise_id}", response_model=Exercise, response_model_exclude_none=True)
async def get_exercise(exercise_id: str, exercises: ExerciseRepository = Depends(get_exercise_repository)):
    return exercises.get(exercise_id)


@router.post("/exercises", response_model=Exercise, response_model_exclude_none=True)
async def create_exercise(
    exercise: ExerciseCreate,
    exercises: ExerciseRepository = Depends(get_exercise_repository),
):
    return exercises.create(exercise.model_dump(by_alias=True, exclude_none=True))


@router.patch("/exercises", response_model=Exercise, response_model_exclude_none=True)
async def update_exercise(
    updates: ExerciseUpdate,
    exercises: ExerciseRepository = Depends(get_exercise_repository),
):
    """
    Update the exercise named by `id` in the body; other fields are merged
    """
    exercise_id = require_id(updates.id)
    patch = updates.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, exclude={"id"})
    return exercises.update(exercise_id, patch)


@router.delete("/exercises")
async def delete_exercise(
    item_id: Optional[str] = Query(None, alias="id"),
    exercises: ExerciseRepository = Depends(get_exercise_repository),
):
    """
    Delete an exercise

    Programs that reference it keep the id; the program view skips it.
    """
    exercises.delete(require_id(item_id))
    return {"success": True}
