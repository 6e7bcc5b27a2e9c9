from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from tracker.db import get_db
from tracker.repositories.exercise_repo import ExerciseRepository
from tracker.schemas.exercise import ExerciseCreate, ExerciseRead

router = APIRouter(prefix="/api/Exercise", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_exercises(db: Session = Depends(get_db)):
    return ExerciseRepository(db).list()

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)):
    exercise = ExerciseRepository(db).get(exercise_id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return exercise

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db)):
    try:
        return ExerciseRepository(db).create(name=payload.name, category=payload.category)
    except ValueError as e:
        if str(e) == "exercise_already_exists":
            raise HTTPException(status_code=400, detail="exercise already exists")
        raise

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)):
    try:
        deleted = ExerciseRepository(db).delete(exercise_id)
    except ValueError as e:
        if str(e) == "exercise_in_use":
            raise HTTPException(
                status_code=400,
                detail="Exercise is used by logged workouts and cannot be deleted",
            )
        raise
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
