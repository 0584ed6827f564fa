"""Presentation-only values computed from API responses.

These run on every refresh and never write anything back.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

PROGRESS_POINTS_LIMIT = 20


def progress_by_date(samples: Iterable[Mapping], limit: int = PROGRESS_POINTS_LIMIT) -> list[dict]:
    """Collapse progress samples to one point per day, keeping the heaviest set.

    Samples arrive oldest first. On equal weight the earlier sample wins.
    Only the last ``limit`` days are returned.
    """
    by_date: dict[str, dict] = {}
    for s in samples:
        day = str(s["date"])
        current = by_date.get(day)
        if current is None or s["weight"] > current["weight"]:
            by_date[day] = {
                "date": day,
                "weight": s["weight"],
                "volume": round(s["volume"]),
                "sets": s["sets"],
                "reps": s["reps"],
            }
    points = sorted(by_date.values(), key=lambda p: p["date"])
    return points[-limit:] if limit else points


def progress_stats(points: Sequence[Mapping]) -> dict:
    if not points:
        return {"max_weight": 0, "avg_weight": 0, "total_volume": 0, "sessions": 0}
    weights = [p["weight"] for p in points]
    return {
        "max_weight": max(weights),
        "avg_weight": round(sum(weights) / len(weights), 1),
        "total_volume": sum(p["volume"] for p in points),
        "sessions": len(points),
    }


def muscle_group_pills(categories: Mapping) -> list[str]:
    return ["All", *categories.get("muscle_groups", [])]


def filter_library(exercises: Iterable[Mapping], muscle_group: str = "All", search: str = "") -> list[Mapping]:
    needle = search.lower()
    return [
        e
        for e in exercises
        if (muscle_group == "All" or e["muscle_group"] == muscle_group)
        and (
            needle in e["name"].lower()
            or needle in e["muscle_group"].lower()
            or needle in e["category"].lower()
        )
    ]


def filter_picker(exercises: Iterable[Mapping], search: str = "") -> list[Mapping]:
    needle = search.lower()
    return [e for e in exercises if needle in e["name"].lower() or needle in e["muscle_group"].lower()]


def validate_workout_form(form: Mapping, entries: Sequence[Mapping]) -> dict[str, str]:
    errors = {}
    if not str(form.get("title") or "").strip():
        errors["title"] = "Workout title is required"
    if not form.get("date"):
        errors["date"] = "Date is required"
    if not entries:
        errors["exercises"] = "Add at least one exercise"
    return errors


def _to_int(value, default: int) -> int:
    try:
        return int(float(value)) or default
    except (TypeError, ValueError, OverflowError):
        return default


def _to_float(value, default: float) -> float:
    try:
        return float(value) or default
    except (TypeError, ValueError):
        return default


def build_workout_payload(form: Mapping, entries: Sequence[Mapping]) -> dict:
    """Turn raw form values (usually strings) into a POST /workouts body."""
    return {
        "date": form.get("date"),
        "title": str(form.get("title") or "").strip(),
        "notes": form.get("notes") or "",
        "duration_minutes": _to_int(form.get("duration_minutes"), 0),
        "exercises": [
            {
                "exercise_id": e["exercise_id"],
                "sets": _to_int(e.get("sets"), 1),
                "reps": _to_int(e.get("reps"), 1),
                "weight": _to_float(e.get("weight"), 0.0),
                "notes": e.get("notes") or "",
            }
            for e in entries
        ],
    }


def format_volume_k(volume: float) -> str:
    if not volume:
        return "0"
    return f"{volume / 1000:.1f}k"
