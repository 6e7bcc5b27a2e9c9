from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from tracker import analytics
from tracker.db import get_db
from tracker.repositories.player_repo import PlayerRepository
from tracker.repositories.stat_repo import StatRepository
from tracker.schemas.stat_entry import (
    LeaderboardEntryRead,
    LeaderboardRead,
    PlayerStatSummary,
    ShootingLineRead,
    StatCreate,
    StatRead,
)

router = APIRouter(prefix="/api/Stat", tags=["stats"])

def _records(entries) -> list[dict]:
    # same camelCase shape the client keeps locally
    return [StatRead.model_validate(e).model_dump(by_alias=True) for e in entries]

def _line(line: analytics.ShootingLine) -> ShootingLineRead:
    return ShootingLineRead.model_validate(line)

@router.get("", response_model=list[StatRead])
def list_stats(
    db: Session = Depends(get_db),
    player_id: int | None = Query(None, alias="playerId"),
):
    return StatRepository(db).list(player_id=player_id)

@router.post("", response_model=StatRead, status_code=status.HTTP_201_CREATED)
def create_stat(payload: StatCreate, db: Session = Depends(get_db)):
    if not PlayerRepository(db).get(payload.player_id):
        raise HTTPException(status_code=400, detail="Player not found")
    fields = payload.model_dump(exclude={"player_id"})
    fields["game_type"] = payload.game_type.value
    return StatRepository(db).create(payload.player_id, **fields)

@router.get("/leaderboard", response_model=LeaderboardRead)
def leaderboard(
    db: Session = Depends(get_db),
    sort_by: analytics.LeaderboardSort = Query(analytics.LeaderboardSort.total_points, alias="sortBy"),
    limit: int = Query(analytics.LEADERBOARD_LIMIT, ge=1, le=100),
):
    players = [
        {"id": p.id, "name": p.full_name, "position": p.position, "photo": p.photo_url}
        for p in PlayerRepository(db).list().items
    ]
    rows = analytics.build_leaderboard(players, _records(StatRepository(db).list()), sort_by, limit)
    return LeaderboardRead(
        sort_by=sort_by,
        entries=[
            LeaderboardEntryRead(
                rank=rank,
                player_id=int(row.player_id),
                name=row.name,
                position=row.position,
                value=row.value(sort_by),
                total_points=row.total_points,
                three_point=_line(row.three),
                two_point=_line(row.two),
                free_throw=_line(row.free_throw),
            )
            for rank, row in enumerate(rows, start=1)
        ],
    )

@router.get("/summary/player/{player_id}", response_model=PlayerStatSummary)
def player_summary(player_id: int, db: Session = Depends(get_db)):
    if not PlayerRepository(db).get(player_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    entries = _records(StatRepository(db).list(player_id=player_id))
    comp = analytics.comparison_stats(entries)
    return PlayerStatSummary(
        player_id=player_id,
        games_played=comp.games_played,
        three_point=_line(comp.three),
        two_point=_line(comp.two),
        free_throw=_line(comp.free_throw),
        total_points=analytics.total_points(comp.three, comp.two, comp.free_throw),
        assists_total=comp.assists_total,
        assists_average=comp.assists_average,
        rebounds_total=comp.rebounds_total,
        rebounds_average=comp.rebounds_average,
        three_point_trend=analytics.calculate_trend(entries, analytics.ShotCategory.three_point),
        free_throw_trend=analytics.calculate_trend(entries, analytics.ShotCategory.free_throw),
    )

@router.get("/{stat_id}", response_model=StatRead)
def get_stat(stat_id: int, db: Session = Depends(get_db)):
    entry = StatRepository(db).get(stat_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stat entry not found")
    return entry

@router.delete("/{stat_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stat(stat_id: int, db: Session = Depends(get_db)):
    if not StatRepository(db).delete(stat_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stat entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
