import argparse
import re
import sys
from typing import Optional

from tabulate import tabulate

from gymlog.client import views
from gymlog.client.api import ApiError, GymLogClient
from gymlog.core.config import get_settings

_ENTRY_RE = re.compile(r"^(?P<id>\d+):(?P<sets>\d+)x(?P<reps>\d+)(?:@(?P<weight>\d+(?:\.\d+)?))?$")


def parse_entry(value: str) -> dict:
    """Parse ``ID:SETSxREPS[@WEIGHT]``, e.g. ``1:3x10@60``."""
    m = _ENTRY_RE.match(value.strip())
    if not m:
        raise argparse.ArgumentTypeError(f"expected ID:SETSxREPS[@WEIGHT], got {value!r}")
    return {
        "exercise_id": int(m["id"]),
        "sets": m["sets"],
        "reps": m["reps"],
        "weight": m["weight"] or "0",
    }


def _table(rows, headers) -> str:
    return tabulate(rows, headers=headers, tablefmt="psql", floatfmt=".1f")


def show_dashboard(client: GymLogClient) -> None:
    view = views.dashboard(client)
    print(_table(
        [[view.total_workouts, f"{view.streak} days", f"{view.total_volume} kg", f"{view.week_workouts} sessions"]],
        ["Total Workouts", "Current Streak", "Total Volume", "This Week"],
    ))
    if view.volume_by_muscle:
        print("\nVolume by Muscle Group")
        print(_table([[r["muscle_group"], r["total_volume"]] for r in view.volume_by_muscle], ["Muscle", "Volume (kg)"]))
    if view.weekly_data:
        print("\nWeekly Activity")
        print(_table([[r["week"], r["count"]] for r in view.weekly_data], ["Week", "Workouts"]))
    print("\nRecent Workouts")
    if view.recent_workouts:
        print(_table(
            [[w["id"], w["date"], w["title"], w["exercise_count"], w["duration_minutes"] or ""] for w in view.recent_workouts],
            ["ID", "Date", "Title", "Exercises", "Minutes"],
        ))
    else:
        print("No workouts yet. Log one with `gymlog log`.")


def show_exercises(client: GymLogClient, muscle_group: str, search: str) -> None:
    view = views.exercise_library(client, muscle_group=muscle_group, search=search)
    print(_table(
        [[e["id"], e["name"], e["category"], e["muscle_group"], e["description"]] for e in view.exercises],
        ["ID", "Name", "Category", "Muscle Group", "Description"],
    ))
    where = f" in {view.muscle_group}" if view.muscle_group != "All" else ""
    print(f"Showing {len(view.exercises)} of {view.total} exercises{where}")
    print("Muscle groups: " + ", ".join(view.pills))


def show_workouts(client: GymLogClient) -> None:
    rows = client.get_workouts()
    print(_table(
        [[w["id"], w["date"], w["title"], w["exercise_count"], w["duration_minutes"]] for w in rows],
        ["ID", "Date", "Title", "Exercises", "Minutes"],
    ))


def show_workout(client: GymLogClient, workout_id: int) -> None:
    w = client.get_workout(workout_id)
    print(f"{w['date']}  {w['title']}  ({w['duration_minutes']} min)")
    if w["notes"]:
        print(w["notes"])
    print(_table(
        [[e["exercise_name"], e["muscle_group"], e["sets"], e["reps"], e["weight"], e["notes"]] for e in w["exercises"]],
        ["Exercise", "Muscle", "Sets", "Reps", "Weight (kg)", "Notes"],
    ))


def show_progress(client: GymLogClient, exercise_id: Optional[int]) -> None:
    view = views.progress_view(client, exercise_id)
    if view.exercise is None:
        print("Exercise not found")
        return
    print(f"{view.exercise['name']} ({view.exercise['muscle_group']})")
    if not view.points:
        print("No sessions logged for this exercise yet")
        return
    s = view.stats
    print(_table(
        [[s["max_weight"], s["avg_weight"], s["total_volume"], s["sessions"]]],
        ["Max Weight", "Avg Weight", "Total Volume", "Sessions"],
    ))
    print(_table(
        [[p["date"], p["weight"], p["volume"], p["sets"], p["reps"]] for p in view.points],
        ["Date", "Weight", "Volume", "Sets", "Reps"],
    ))


def log_workout(client: GymLogClient, args: argparse.Namespace) -> int:
    form = {
        "date": args.date,
        "title": args.title,
        "notes": args.notes,
        "duration_minutes": args.duration,
    }
    result = views.log_workout(client, form, args.exercise or [])
    if result.errors:
        for name, message in result.errors.items():
            print(f"error: {name}: {message}", file=sys.stderr)
        return 1
    print(f"Workout logged (id {result.workout['id']})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gymlog", description="Gym log terminal client")
    parser.add_argument("--api-url", default=None, help="API root, e.g. http://localhost:3001/api")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("dashboard")

    ex = sub.add_parser("exercises")
    ex.add_argument("--muscle-group", default="All")
    ex.add_argument("--search", default="")

    add = sub.add_parser("add-exercise")
    add.add_argument("name")
    add.add_argument("--category", required=True)
    add.add_argument("--muscle-group", required=True)
    add.add_argument("--description", default="")

    dex = sub.add_parser("delete-exercise")
    dex.add_argument("exercise_id", type=int)

    sub.add_parser("workouts")

    show = sub.add_parser("show")
    show.add_argument("workout_id", type=int)

    log = sub.add_parser("log")
    log.add_argument("--title", required=True)
    log.add_argument("--date", default=None, help="YYYY-MM-DD, defaults to today")
    log.add_argument("--notes", default="")
    log.add_argument("--duration", default=None)
    log.add_argument("--exercise", action="append", type=parse_entry, help="ID:SETSxREPS[@WEIGHT]")

    dw = sub.add_parser("delete-workout")
    dw.add_argument("workout_id", type=int)

    prog = sub.add_parser("progress")
    prog.add_argument("exercise_id", type=int, nargs="?")

    return parser


def main(argv: Optional[list[str]] = None, client: Optional[GymLogClient] = None) -> int:
    args = build_parser().parse_args(argv)
    own_client = client is None
    client = client or GymLogClient(args.api_url or get_settings().API_URL)

    try:
        if args.cmd == "dashboard":
            show_dashboard(client)
        elif args.cmd == "exercises":
            show_exercises(client, args.muscle_group, args.search)
        elif args.cmd == "add-exercise":
            created = client.create_exercise({
                "name": args.name,
                "category": args.category,
                "muscle_group": args.muscle_group,
                "description": args.description,
            })
            print(f"Exercise added (id {created['id']})")
        elif args.cmd == "delete-exercise":
            print(client.delete_exercise(args.exercise_id)["message"])
        elif args.cmd == "workouts":
            show_workouts(client)
        elif args.cmd == "show":
            show_workout(client, args.workout_id)
        elif args.cmd == "log":
            return log_workout(client, args)
        elif args.cmd == "delete-workout":
            print(client.delete_workout(args.workout_id)["message"])
        elif args.cmd == "progress":
            show_progress(client, args.exercise_id)
    except ApiError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        if own_client:
            client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
