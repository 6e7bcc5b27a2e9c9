"""REST client for the tracker backend."""
from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from tracker.settings import get_settings

log = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-OK response from the API."""

    def __init__(self, status_code: Optional[int], detail: str) -> None:
        super().__init__(f"{status_code}: {detail}" if status_code else detail)
        self.status_code = status_code
        self.detail = detail


class ApiUnavailable(ApiError):
    """The API could not be reached at all."""

    def __init__(self, detail: str) -> None:
        super().__init__(None, detail)


class TrackerApi:
    """Thin wrapper over the /api endpoints.

    ``session`` is anything with a requests-style ``request`` method, so a
    FastAPI ``TestClient`` can stand in for the network in tests.
    """

    def __init__(self, base_url: Optional[str] = None, session: Any = None, timeout: Optional[float] = None) -> None:
        self.base_url = (base_url or get_settings().API_BASE).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/api{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning("%s %s unreachable: %s", method, url, e)
            raise ApiUnavailable(str(e)) from e
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
            log.warning("%s %s -> %s %s", method, url, resp.status_code, detail)
            raise ApiError(resp.status_code, str(detail))
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # players
    def list_players(self) -> list[dict]:
        return self._request("GET", "/Player")

    def get_player_by_email(self, email: str) -> dict:
        return self._request("GET", f"/Player/email/{quote(email, safe='')}")

    def create_player(self, data: dict) -> dict:
        return self._request("POST", "/Player", json=data)

    def update_player(self, player_id: int, data: dict) -> dict:
        return self._request("PUT", f"/Player/{player_id}", json=data)

    def delete_player(self, player_id: int) -> None:
        self._request("DELETE", f"/Player/{player_id}")

    # lifts
    def list_lifts(self) -> list[dict]:
        return self._request("GET", "/Lift")

    def list_player_lifts(self, player_id: int) -> list[dict]:
        return self._request("GET", f"/Lift/player/{player_id}")

    def lift_history(self, player_id: int) -> list[dict]:
        return self._request("GET", f"/Lift/history/player/{player_id}")

    def create_lift(self, data: dict) -> dict:
        return self._request("POST", "/Lift", json=data)

    # exercises
    def list_exercises(self) -> list[dict]:
        return self._request("GET", "/Exercise")

    def create_exercise(self, name: str, category: Optional[str] = None) -> dict:
        return self._request("POST", "/Exercise", json={"name": name, "category": category})

    def delete_exercise(self, exercise_id: int) -> None:
        self._request("DELETE", f"/Exercise/{exercise_id}")

    # workouts
    def list_workouts(self, **filters: Any) -> list[dict]:
        params = {k: v for k, v in filters.items() if v not in (None, "", "all")}
        return self._request("GET", "/Workout", params=params)

    def create_workout(self, data: dict) -> dict:
        return self._request("POST", "/Workout", json=data)
