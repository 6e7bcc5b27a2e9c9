from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from tracker.db import get_db
from tracker.repositories.player_repo import PlayerRepository
from tracker.schemas.player import PlayerCreate, PlayerRead, PlayerUpdate

router = APIRouter(prefix="/api/Player", tags=["players"])

@router.get("", response_model=list[PlayerRead])
def list_players(
    db: Session = Depends(get_db),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
):
    return PlayerRepository(db).list(limit=limit, offset=offset).items

@router.get("/email/{email}", response_model=PlayerRead)
def get_player_by_email(email: str, db: Session = Depends(get_db)):
    player = PlayerRepository(db).get_by_email(email)
    if not player:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return player

@router.get("/{player_id}", response_model=PlayerRead)
def get_player(player_id: int, db: Session = Depends(get_db)):
    player = PlayerRepository(db).get(player_id)
    if not player:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return player

@router.post("", response_model=PlayerRead, status_code=status.HTTP_201_CREATED)
def create_player(payload: PlayerCreate, db: Session = Depends(get_db)):
    repo = PlayerRepository(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail="email already registered")
    try:
        player = repo.create(**payload.model_dump())
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail="email already registered")
        raise
    return player

@router.put("/{player_id}", response_model=PlayerRead)
def update_player(player_id: int, payload: PlayerUpdate, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != player_id:
        raise HTTPException(status_code=400, detail="Player id mismatch")
    repo = PlayerRepository(db)
    other = repo.get_by_email(payload.email)
    if other and other.id != player_id:
        raise HTTPException(status_code=400, detail="email already registered")
    try:
        player = repo.update(player_id, **payload.model_dump(exclude={"id"}))
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail="email already registered")
        raise
    if not player:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return player

@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_player(player_id: int, db: Session = Depends(get_db)):
    # lifts, lift history, workouts and stat entries go with the player
    if not PlayerRepository(db).delete(player_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
