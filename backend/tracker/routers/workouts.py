from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from tracker.db import get_db
from tracker.repositories.exercise_repo import ExerciseRepository
from tracker.repositories.player_repo import PlayerRepository
from tracker.repositories.workout_repo import WorkoutRepository
from tracker.schemas.workout import WorkoutCreate, WorkoutRead

router = APIRouter(prefix="/api/Workout", tags=["workouts"])

@router.get("", response_model=list[WorkoutRead])
def list_workouts(
    db: Session = Depends(get_db),
    player_id: int | None = Query(None, alias="playerId"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")
    return WorkoutRepository(db).list(player_id=player_id, start_date=start_date, end_date=end_date)

@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def create_workout(payload: WorkoutCreate, db: Session = Depends(get_db)):
    if not PlayerRepository(db).get(payload.player_id):
        raise HTTPException(status_code=400, detail="Player not found")
    exercises = ExerciseRepository(db)
    for s in payload.sets:
        if not exercises.get(s.exercise_id):
            raise HTTPException(status_code=400, detail=f"Exercise not found: {s.exercise_id}")
    return WorkoutRepository(db).create(
        payload.player_id,
        date=payload.date,
        notes=payload.notes,
        sets=[s.model_dump() for s in payload.sets],
    )

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, db: Session = Depends(get_db)):
    workout = WorkoutRepository(db).get(workout_id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout

@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(workout_id: int, db: Session = Depends(get_db)):
    if not WorkoutRepository(db).delete(workout_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
