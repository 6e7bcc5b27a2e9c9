"""Client-side team state, kept in sync with the API on a best-effort basis.

Every mutating call tries the API first. If the API cannot be reached or
answers with an error, the change is applied to the in-memory cache and
written to local storage instead, so the caller never blocks on
connectivity. Nothing reconciles the two stores afterwards: records
created offline keep their timestamp ids and are never pushed to the API.
"""
from __future__ import annotations

import datetime as dt
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from tracker import analytics
from tracker.client.api import ApiError, ApiUnavailable, TrackerApi
from tracker.client.storage import (
    LIFTS_KEY,
    PLAYERS_KEY,
    STATS_KEY,
    USER_EMAIL_KEY,
    WORKOUTS_KEY,
    LocalStorage,
)
from tracker.settings import get_settings

log = logging.getLogger(__name__)

ALL_PLAYERS = "all"
_KEEP = object()


class ValidationError(ValueError):
    """Input rejected before anything is sent or stored."""


@dataclass(slots=True)
class Notification:
    message: str
    level: str = "info"  # info | success | warning | error


@dataclass(slots=True)
class LiftingFilters:
    player_id: str = ALL_PLAYERS
    start_date: Optional[str] = None
    end_date: Optional[str] = None


def _log_notification(note: Notification) -> None:
    level = {"error": logging.ERROR, "warning": logging.WARNING}.get(note.level, logging.INFO)
    log.log(level, note.message)


def player_from_api(data: dict) -> dict:
    """API player -> the flatter shape the client caches."""
    return {
        "id": str(data["id"]),
        "name": f"{data['firstName']} {data['lastName']}",
        "firstName": data["firstName"],
        "lastName": data["lastName"],
        "position": data["position"],
        "email": data.get("email"),
        "photo": data.get("photoUrl") or None,
    }


class TeamTracker:
    def __init__(
        self,
        api: Optional[TrackerApi] = None,
        storage: Optional[LocalStorage] = None,
        notify: Optional[Callable[[Notification], None]] = None,
        today: Optional[Callable[[], dt.date]] = None,
    ) -> None:
        self.api = api or TrackerApi()
        self.storage = storage or LocalStorage(get_settings().STORAGE_PATH)
        self._notify = notify or _log_notification
        self._today = today or dt.date.today
        self._last_local_id = 0

        self.players: list[dict] = []
        self.workouts: list[dict] = self.storage.load_list(WORKOUTS_KEY)
        self.stats: list[dict] = self.storage.load_list(STATS_KEY)
        self.current_player: Optional[str] = None
        self.last_notification: Optional[Notification] = None

        # lifting state
        self.exercises: list[dict] = []
        self.lifting_workouts: list[dict] = []
        self.lifting_filters = LiftingFilters()

    def init(self) -> "TeamTracker":
        self.players = self.load_players()
        self.load_exercises()
        self.load_lifting_workouts()
        self.current_player = self.players[0]["id"] if self.players else None
        return self

    # helpers
    def notify(self, message: str, level: str = "info") -> None:
        self.last_notification = Notification(message, level)
        self._notify(self.last_notification)

    def _new_local_id(self) -> int:
        # millisecond timestamp like Date.now(), bumped when two land in the same ms
        self._last_local_id = max(int(time.time() * 1000), self._last_local_id + 1)
        return self._last_local_id

    def find_player(self, player_id: Any) -> Optional[dict]:
        return next((p for p in self.players if p["id"] == str(player_id)), None)

    def save_players(self) -> None:
        self.storage.save_list(PLAYERS_KEY, self.players)

    def save_workouts(self) -> None:
        self.storage.save_list(WORKOUTS_KEY, self.workouts)

    def save_stats(self) -> None:
        self.storage.save_list(STATS_KEY, self.stats)

    def drop_stored_lifting_workouts(self, player_id: Any) -> None:
        # the cached list may be a filtered view, so prune the stored copy itself
        stored = self.storage.load_list(LIFTS_KEY)
        self.storage.save_list(LIFTS_KEY, [w for w in stored if not analytics.same_player(w, player_id)])

    # players
    def load_players(self) -> list[dict]:
        try:
            players = [player_from_api(p) for p in self.api.list_players()]
        except ApiUnavailable:
            # only a dead API falls back to the local copy
            return self.storage.load_list(PLAYERS_KEY)
        except ApiError:
            return []
        self.storage.save_list(PLAYERS_KEY, players)
        return players

    def add_player(
        self,
        first_name: str,
        last_name: str,
        position: str,
        email: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> dict:
        email = email or self.current_user_email()
        payload = {
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "position": position,
            "photoUrl": photo,
        }
        try:
            player = player_from_api(self.api.create_player(payload))
            message, level = "Player added successfully!", "success"
        except ApiError as e:
            log.warning("add player via API failed, keeping it locally: %s", e)
            player = {
                "id": str(self._new_local_id()),
                "name": f"{first_name} {last_name}",
                "firstName": first_name,
                "lastName": last_name,
                "position": position,
                "email": email,
                "photo": photo,
            }
            message, level = "Player saved locally (server unavailable).", "warning"

        self.players.append(player)
        self.save_players()
        if len(self.players) == 1:
            self.current_player = player["id"]
        self.notify(message, level)
        return player

    def update_player(
        self,
        player_id: str,
        first_name: str,
        last_name: str,
        position: str,
        photo: Any = _KEEP,
        remove_photo: bool = False,
        email: Optional[str] = None,
    ) -> Optional[dict]:
        player = self.find_player(player_id)
        if not player:
            self.notify("Player not found!", "error")
            return None

        if remove_photo:
            new_photo = None
        elif photo is not _KEEP and photo:
            new_photo = photo
        else:
            new_photo = player.get("photo")
        email = email or player.get("email") or self.current_user_email()

        payload = {
            "id": int(player["id"]),
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "position": position,
            "photoUrl": new_photo,
        }
        try:
            self.api.update_player(int(player["id"]), payload)
            message, level = "Player updated successfully!", "success"
        except ApiError as e:
            log.warning("update player %s via API failed, updating locally: %s", player_id, e)
            message, level = "Player updated locally (server unavailable).", "warning"

        player.update({
            "name": f"{first_name} {last_name}",
            "firstName": first_name,
            "lastName": last_name,
            "position": position,
            "email": email,
            "photo": new_photo,
        })
        self.save_players()
        self.notify(message, level)
        return player

    def delete_player(self, player_id: str) -> bool:
        """Removes the player and everything recorded for them."""
        player_id = str(player_id)
        if not self.find_player(player_id):
            self.notify("Player not found!", "error")
            return False
        try:
            self.api.delete_player(int(player_id))
            message, level = "Player deleted successfully!", "success"
        except ApiError as e:
            log.warning("delete player %s via API failed, deleting locally: %s", player_id, e)
            message, level = "Player deleted locally (server unavailable).", "warning"

        self.players = [p for p in self.players if p["id"] != player_id]
        self.workouts = [w for w in self.workouts if not analytics.same_player(w, player_id)]
        self.stats = [s for s in self.stats if not analytics.same_player(s, player_id)]
        self.lifting_workouts = [w for w in self.lifting_workouts if not analytics.same_player(w, player_id)]
        if self.current_player == player_id:
            self.current_player = self.players[0]["id"] if self.players else None

        self.save_players()
        self.save_workouts()
        self.save_stats()
        self.drop_stored_lifting_workouts(player_id)
        self.notify(message, level)
        return True

    # session workouts and shooting stats (local only)
    def add_combined_entry(
        self,
        player_id: str,
        date: Optional[str] = None,
        session_type: str = "practice",
        notes: str = "",
        three_point_attempts: int = 0,
        three_point_makes: int = 0,
        two_point_attempts: int = 0,
        two_point_makes: int = 0,
        free_throw_attempts: int = 0,
        free_throw_makes: int = 0,
        assists: int = 0,
        rebounds: int = 0,
    ) -> tuple[dict, dict]:
        """Log a session and its shooting line together."""
        if not player_id:
            self.notify("Please select a player!", "error")
            raise ValidationError("a player is required")
        date = date or self._today().isoformat()
        stamp = dt.datetime.now(dt.timezone.utc).isoformat()

        workout = {
            "id": self._new_local_id(),
            "playerId": str(player_id),
            "date": date,
            "type": session_type,
            "notes": notes,
            "timestamp": stamp,
        }
        entry = {
            "id": self._new_local_id(),
            "playerId": str(player_id),
            "date": date,
            "gameType": session_type,
            "threePointAttempts": analytics.clamp_count(three_point_attempts),
            "threePointMakes": analytics.clamp_makes(three_point_makes, three_point_attempts),
            "twoPointAttempts": analytics.clamp_count(two_point_attempts),
            "twoPointMakes": analytics.clamp_makes(two_point_makes, two_point_attempts),
            "freeThrowAttempts": analytics.clamp_count(free_throw_attempts),
            "freeThrowMakes": analytics.clamp_makes(free_throw_makes, free_throw_attempts),
            "assists": analytics.clamp_count(assists),
            "rebounds": analytics.clamp_count(rebounds),
            "timestamp": stamp,
        }
        self.workouts.insert(0, workout)
        self.stats.insert(0, entry)
        self.current_player = str(player_id)
        self.save_workouts()
        self.save_stats()
        self.notify("Workout and statistics added successfully!", "success")
        return workout, entry

    def delete_workout(self, workout_id: int) -> None:
        self.workouts = [w for w in self.workouts if w["id"] != workout_id]
        self.save_workouts()
        self.notify("Workout deleted successfully!", "success")

    def delete_stats(self, stat_id: int) -> None:
        self.stats = [s for s in self.stats if s["id"] != stat_id]
        self.save_stats()
        self.notify("Statistics deleted successfully!", "success")

    # signed-in user
    def current_user_email(self) -> Optional[str]:
        return self.storage.get_item(USER_EMAIL_KEY)

    def sign_in(self, email: str) -> None:
        self.storage.set_item(USER_EMAIL_KEY, email)

    def sign_out(self) -> None:
        self.storage.remove_item(USER_EMAIL_KEY)
        self.notify("Logged out successfully!", "success")

    def get_current_user(self) -> Optional[dict]:
        email = self.current_user_email()
        if not email:
            return None
        try:
            return self.api.get_player_by_email(email)
        except ApiError as e:
            log.warning("could not resolve current user %s: %s", email, e)
            return None

    # lifting
    def load_exercises(self) -> list[dict]:
        try:
            self.exercises = self.api.list_exercises()
        except ApiError:
            self.exercises = []
        return self.exercises

    def _filter_local_lifting(self, workouts: list[dict]) -> list[dict]:
        f = self.lifting_filters
        start, end = analytics.as_date(f.start_date), analytics.as_date(f.end_date)
        out = []
        for w in workouts:
            if f.player_id not in (None, "", ALL_PLAYERS) and not analytics.same_player(w, f.player_id):
                continue
            d = analytics.as_date(w.get("date"))
            if start and (d is None or d < start):
                continue
            if end and (d is None or d > end):
                continue
            out.append(w)
        return out

    def load_lifting_workouts(self) -> list[dict]:
        f = self.lifting_filters
        try:
            workouts = self.api.list_workouts(
                playerId=f.player_id, startDate=f.start_date, endDate=f.end_date,
            )
        except ApiUnavailable:
            workouts = self._filter_local_lifting(self.storage.load_list(LIFTS_KEY))
        except ApiError:
            workouts = []
        else:
            if f == LiftingFilters():
                # unfiltered view is the full picture, keep it as the offline copy
                self.storage.save_list(LIFTS_KEY, workouts)
        self.lifting_workouts = workouts
        return workouts

    def set_lifting_filters(
        self,
        player_id: str = ALL_PLAYERS,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[dict]:
        self.lifting_filters = LiftingFilters(player_id or ALL_PLAYERS, start_date or None, end_date or None)
        return self.load_lifting_workouts()

    def default_lifting_range(self, days: int = 30) -> tuple[str, str]:
        today = self._today()
        return (today - dt.timedelta(days=days)).isoformat(), today.isoformat()

    def _exercise(self, exercise_id: int) -> Optional[dict]:
        return next((e for e in self.exercises if e["id"] == exercise_id), None)

    def submit_lifting_workout(
        self,
        player_id: Any,
        date: Optional[str],
        sets: list[dict],
        notes: Optional[str] = None,
    ) -> dict:
        """
        sets: [{"exerciseId", "setNumber", "reps", "weight"}, ...]
        Rejected before any request when player, date or sets are missing.
        """
        if not player_id or not date or not sets:
            self.notify("Please select player, date, and add at least one set.", "error")
            raise ValidationError("player, date and at least one set are required")

        clean_sets = [
            {
                "exerciseId": int(s["exerciseId"]),
                "setNumber": int(s.get("setNumber") or 1),
                "reps": int(s.get("reps") or 0),
                "weight": float(s.get("weight") or 0),
            }
            for s in sets
        ]
        notes = (notes or "").strip() or None
        payload = {"playerId": int(player_id), "date": date, "notes": notes, "sets": clean_sets}
        try:
            workout = self.api.create_workout(payload)
        except ApiError as e:
            log.warning("save workout via API failed, keeping it locally: %s", e)
            workout = {
                "id": self._new_local_id(),
                "playerId": int(player_id),
                "date": date,
                "notes": notes,
                "sets": [dict(s, exercise=self._exercise(s["exerciseId"])) for s in clean_sets],
            }
            stored = self.storage.load_list(LIFTS_KEY)
            stored.insert(0, workout)
            self.storage.save_list(LIFTS_KEY, stored)
            self.lifting_workouts.insert(0, workout)
            self.notify("Workout saved locally (server unavailable).", "warning")
            return workout

        self.load_lifting_workouts()
        self.notify("Workout saved!", "success")
        return workout

    def add_exercise(self, name: str, category: Optional[str] = None) -> Optional[dict]:
        name = (name or "").strip()
        if not name:
            return None
        try:
            exercise = self.api.create_exercise(name, (category or "").strip() or None)
        except ApiError as e:
            self.notify(f"Failed to add exercise: {e.detail}", "error")
            return None
        self.load_exercises()
        return exercise

    def delete_exercise(self, exercise_id: int) -> bool:
        try:
            self.api.delete_exercise(exercise_id)
        except ApiError as e:
            self.notify(f"Failed to delete exercise: {e.detail}", "error")
            return False
        self.load_exercises()
        return True

    # single lifts
    def load_lifts(self) -> list[dict]:
        try:
            lifts = self.api.list_lifts()
        except ApiError:
            return []
        return [
            dict(l, playerName=f"{l['player']['firstName']} {l['player']['lastName']}" if l.get("player") else "")
            for l in lifts
        ]

    def load_player_lifts(self, player_id: Any, history: bool = False) -> list[dict]:
        """One player's lifts, newest first. ``history`` reads the append-only log instead."""
        if not str(player_id or "").isdigit():
            self.notify("Please select a player.", "error")
            raise ValidationError("a server player id is required")
        fetch = self.api.lift_history if history else self.api.list_player_lifts
        try:
            return fetch(int(player_id))
        except ApiError as e:
            self.notify(f"Error loading lifts: {e.detail}", "error")
            return []

    def log_lift(
        self,
        player_id: Any,
        exercise_name: str,
        weight: float,
        reps: int,
        sets: int = 1,
        notes: Optional[str] = None,
    ) -> Optional[dict]:
        """Single lifts have no offline copy; a failed save is reported and dropped."""
        if not player_id or not (exercise_name or "").strip():
            self.notify("Please select a player and an exercise.", "error")
            raise ValidationError("player and exercise are required")
        payload = {
            "playerId": int(player_id),
            "exerciseName": exercise_name.strip(),
            "weight": float(weight),
            "reps": int(reps),
            "sets": int(sets),
            "notes": (notes or "").strip() or None,
        }
        try:
            lift = self.api.create_lift(payload)
        except ApiError as e:
            self.notify(f"Error logging lift: {e.detail}", "error")
            return None
        self.notify("Lift logged successfully!", "success")
        return lift

    def lift_summary(self) -> analytics.LiftSummary:
        return analytics.lift_summary(self.load_lifts(), self._today())

    # derived views
    def _selected(self, records: list[dict], player_id: Optional[str]) -> list[dict]:
        player_id = player_id or self.current_player
        if player_id == ALL_PLAYERS:
            return list(records)
        return [r for r in records if analytics.same_player(r, player_id)]

    def dashboard(self, player_id: Optional[str] = None) -> analytics.Dashboard:
        if not (player_id or self.current_player):
            return analytics.dashboard([], [], self._today())
        return analytics.dashboard(
            self._selected(self.workouts, player_id),
            self._selected(self.stats, player_id),
            self._today(),
        )

    def sessions(self, player_id: Optional[str] = None) -> tuple[list[dict], list[dict]]:
        """The selected player's (or everyone's) session workouts and stat entries."""
        if not (player_id or self.current_player):
            return [], []
        return self._selected(self.workouts, player_id), self._selected(self.stats, player_id)

    def team_overview(self) -> analytics.TeamOverview:
        return analytics.team_overview(self.players, self.workouts, self.stats)

    def leaderboard(self, sort_by: str = analytics.LeaderboardSort.total_points) -> list[analytics.LeaderboardRow]:
        return analytics.build_leaderboard(self.players, self.stats, sort_by)

    def weekly_activity(self, player_id: Optional[str] = None) -> list[tuple[dt.date, int]]:
        return analytics.weekly_activity(self._selected(self.workouts, player_id), self._today())

    def compare(self, first_id: str, second_id: str):
        """Returns ((player, lines), (player, lines)) for two different players."""
        if not first_id or not second_id or str(first_id) == str(second_id):
            self.notify("Please select two different players to compare.", "error")
            raise ValidationError("two different players are required")
        first, second = self.find_player(first_id), self.find_player(second_id)
        if not first or not second:
            self.notify("One or both players not found.", "error")
            raise ValidationError("unknown player")
        lines_a, lines_b = analytics.compare_players(
            self._selected(self.stats, first["id"]),
            self._selected(self.stats, second["id"]),
        )
        return (first, lines_a), (second, lines_b)

    def lifting_quick_stats(self) -> analytics.LiftingQuickStats:
        return analytics.lifting_quick_stats(self.lifting_workouts)

    def lifting_progress(self) -> list[analytics.ProgressLine]:
        return analytics.lifting_progress(self.lifting_workouts)
