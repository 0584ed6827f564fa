from __future__ import annotations

from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """A request to the gym log API failed."""

    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class GymLogClient:
    """Client for the gym log JSON API rooted at ``base_url``."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001/api",
        *,
        timeout: float = 10.0,
        http: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> GymLogClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("api_unreachable", method=method, url=url, error=str(e))
            raise ApiError(None, f"Could not reach {url}: {e}") from e

        if resp.is_error:
            try:
                message = resp.json().get("error") or resp.reason_phrase
            except ValueError:
                message = resp.text or resp.reason_phrase
            logger.warning("api_error", method=method, url=url, status=resp.status_code, error=message)
            raise ApiError(resp.status_code, message)
        return resp.json()

    # Workouts

    def get_workouts(self) -> list[dict]:
        return self._request("GET", "/workouts")

    def get_workout(self, workout_id: int) -> dict:
        return self._request("GET", f"/workouts/{workout_id}")

    def create_workout(self, data: dict) -> dict:
        return self._request("POST", "/workouts", json=data)

    def delete_workout(self, workout_id: int) -> dict:
        return self._request("DELETE", f"/workouts/{workout_id}")

    # Exercises

    def get_exercises(self, category: str | None = None, muscle_group: str | None = None) -> list[dict]:
        params = {}
        if category:
            params["category"] = category
        if muscle_group:
            params["muscle_group"] = muscle_group
        return self._request("GET", "/exercises", params=params)

    def get_categories(self) -> dict:
        return self._request("GET", "/exercises/categories")

    def create_exercise(self, data: dict) -> dict:
        return self._request("POST", "/exercises", json=data)

    def delete_exercise(self, exercise_id: int) -> dict:
        return self._request("DELETE", f"/exercises/{exercise_id}")

    # Progress

    def get_exercise_progress(self, exercise_id: int) -> list[dict]:
        return self._request("GET", f"/progress/exercise/{exercise_id}")

    def get_summary(self) -> dict:
        return self._request("GET", "/progress/summary")

    def health(self) -> dict:
        return self._request("GET", "/health")
