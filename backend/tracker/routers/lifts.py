from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tracker.db import get_db
from tracker.repositories.lift_repo import LiftRepository
from tracker.repositories.player_repo import PlayerRepository
from tracker.schemas.lift import LiftCreate, LiftRead, LiftHistoryRead

router = APIRouter(prefix="/api/Lift", tags=["lifts"])

# Offered by the lift form before an exercise library exists
DEFAULT_EXERCISES = ["Bench Press", "Squat", "Deadlift", "Row", "Curl", "Pull Ups"]

@router.get("/exercises", response_model=list[str])
def list_default_exercises():
    return DEFAULT_EXERCISES

@router.get("", response_model=list[LiftRead])
def list_lifts(db: Session = Depends(get_db)):
    return LiftRepository(db).list_all()

@router.get("/player/{player_id}", response_model=list[LiftRead])
def list_player_lifts(player_id: int, db: Session = Depends(get_db)):
    return LiftRepository(db).list_by_player(player_id)

@router.get("/history/player/{player_id}", response_model=list[LiftHistoryRead])
def list_player_lift_history(player_id: int, db: Session = Depends(get_db)):
    return LiftRepository(db).history_by_player(player_id)

@router.post("", response_model=LiftRead, status_code=status.HTTP_201_CREATED)
def create_lift(payload: LiftCreate, db: Session = Depends(get_db)):
    if not PlayerRepository(db).get(payload.player_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Player not found")
    return LiftRepository(db).create(
        payload.player_id,
        exercise_name=payload.exercise_name,
        weight=payload.weight,
        reps=payload.reps,
        sets=payload.sets,
        notes=payload.notes,
    )

@router.get("/{lift_id}", response_model=LiftRead)
def get_lift(lift_id: int, db: Session = Depends(get_db)):
    lift = LiftRepository(db).get(lift_id)
    if not lift:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lift not found")
    return lift
