import argparse
import logging
from typing import Optional, Sequence

from tracker.analytics import LeaderboardSort
from tracker.client import LocalStorage, TeamTracker, TrackerApi, ValidationError
from tracker.client import render
from tracker.settings import get_settings


def build_tracker(api_base: Optional[str], storage_path: Optional[str]) -> TeamTracker:
    settings = get_settings()
    tracker = TeamTracker(
        api=TrackerApi(api_base or settings.API_BASE),
        storage=LocalStorage(storage_path or settings.STORAGE_PATH),
    )
    return tracker.init()


def serve(host: str, port: int, reload: bool = False) -> None:
    import uvicorn

    uvicorn.run("tracker.main:app", host=host, port=port, reload=reload)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Basketball tracker commands")
    parser.add_argument("--api", help="API base URL (defaults to API_BASE)")
    parser.add_argument("--storage", help="local storage file (defaults to STORAGE_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    srv = sub.add_parser("serve")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=5038)
    srv.add_argument("--reload", action="store_true")

    sub.add_parser("players")

    dash = sub.add_parser("dashboard")
    dash.add_argument("--player", help="player id, or 'all' for the whole team")

    board = sub.add_parser("leaderboard")
    board.add_argument("--sort-by", choices=[s.value for s in LeaderboardSort], default=LeaderboardSort.total_points.value)

    cmp_ = sub.add_parser("compare")
    cmp_.add_argument("first")
    cmp_.add_argument("second")

    lift = sub.add_parser("lifting")
    lift.add_argument("--player", default="all")
    lift.add_argument("--start")
    lift.add_argument("--end")

    hist = sub.add_parser("stats")
    hist.add_argument("--player", help="player id, or 'all' for the whole team")

    lifts = sub.add_parser("lifts")
    lifts.add_argument("--player", help="server player id; omit for the team summary")
    lifts.add_argument("--history", action="store_true", help="read the append-only lift log")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.cmd == "serve":
        serve(args.host, args.port, args.reload)
        return 0

    tracker = build_tracker(args.api, args.storage)

    if args.cmd == "players":
        print(render.render_players(tracker.players, tracker.current_player))
        print(render.render_team_overview(tracker.team_overview()))
    elif args.cmd == "dashboard":
        print(render.render_dashboard(tracker.dashboard(args.player)))
        print(render.render_weekly_activity(tracker.weekly_activity(args.player)))
    elif args.cmd == "leaderboard":
        rows = tracker.leaderboard(args.sort_by)
        print(render.render_leaderboard(rows, args.sort_by, tracker.current_player))
    elif args.cmd == "compare":
        try:
            first, second = tracker.compare(args.first, args.second)
        except ValidationError as e:
            print(tracker.last_notification.message if tracker.last_notification else str(e))
            return 2
        print(render.render_comparison(first, second))
    elif args.cmd == "lifting":
        tracker.set_lifting_filters(args.player, args.start, args.end)
        print(render.render_lifting(
            tracker.lifting_workouts, tracker.lifting_quick_stats(), tracker.lifting_progress(),
        ))
    elif args.cmd == "stats":
        workouts, entries = tracker.sessions(args.player)
        print(render.render_sessions(workouts, tracker.players))
        print(render.render_stats(entries, tracker.players))
    elif args.cmd == "lifts":
        if not args.player:
            print(render.render_lift_summary(tracker.lift_summary()))
            return 0
        try:
            rows = tracker.load_player_lifts(args.player, history=args.history)
        except ValidationError as e:
            print(tracker.last_notification.message if tracker.last_notification else str(e))
            return 2
        print(render.render_lifts(rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
