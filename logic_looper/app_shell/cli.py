import argparse
import asyncio
import calendar
import json
import logging
import sys
from datetime import date, datetime

from logic_looper.adapters.clock import FixedClock, SystemClock
from logic_looper.app_shell.config import resolve_data_dir, resolve_rules_path, validate_ops_rules
from logic_looper.app_shell.context import AppContext
from logic_looper.components.progress.component import activity_intensity, remaining_hints, solved_dates_in_year
from logic_looper.components.puzzle.component import difficulty_label, puzzle_type_label
from logic_looper.components.sync.models import SyncResult, SyncStatus
from logic_looper.components.sync.ports import RemoteError
from logic_looper.ports.kv import StorageError
from logic_looper.rules.loader import load_rules_or_default

logger = logging.getLogger("cli")


def get_context(args: argparse.Namespace) -> AppContext:
    rules_path = resolve_rules_path(args.rules)
    try:
        rules = load_rules_or_default(rules_path)
    except ValueError as e:
        logger.error("Invalid rules file %s: %s", rules_path, e)
        sys.exit(1)

    data_dir = resolve_data_dir(rules)
    validate_ops_rules(rules, base_dir=data_dir)

    clock = SystemClock()
    if args.today:
        # Pin "today" but keep the wall-clock time so timers still tick.
        as_of = date.fromisoformat(args.today)
        clock = FixedClock(datetime.combine(as_of, datetime.now().time()))

    return AppContext.create(rules, data_dir=data_dir, clock=clock)


def _print_sync(label: str, result: SyncResult) -> None:
    detail = f" ({result.message})" if result.message else ""
    print(f"{label}: {result.status.value}{detail}")
    if result.pushed:
        print(f"Pushed {result.pushed} solved days.")
    if result.inserted:
        print(f"Adopted {len(result.inserted)} days from the cloud: {', '.join(result.inserted)}")


def handle_puzzle(ctx: AppContext, args: argparse.Namespace) -> int:
    puzzle = ctx.puzzle(args.date)
    data = puzzle.to_dict()
    if not args.reveal:
        data.pop("answer")
        data.pop("rule")

    if args.json:
        print(json.dumps(data))
        return 0

    print(f"{puzzle_type_label(puzzle)} - {difficulty_label(puzzle.difficulty)}")
    cells = ["?" if c is None else str(c) for c in (data.get("numbers") or data.get("grid"))]
    if puzzle.type == "sequence":
        print("  ".join(cells))
    else:
        for row in range(3):
            print("  ".join(f"{c:>4}" for c in cells[row * 3 : row * 3 + 3]))
        print(f"Options: {', '.join(str(o) for o in data['options'])}")
    if args.reveal:
        print(f"Answer: {puzzle.answer} ({puzzle.rule})")
    return 0


def handle_start(ctx: AppContext, args: argparse.Namespace) -> int:
    state = ctx.session().start()
    if state.completed:
        print("Today's puzzle is already solved.")
    else:
        print("Timer started.")
    return 0


def handle_hint(ctx: AppContext, args: argparse.Namespace) -> int:
    out = ctx.session().hint()
    if not out.success:
        print(out.errors[0].message)
        return 1
    print(out.hint)
    print(f"Hints left today: {out.remaining}")
    return 0


def handle_answer(ctx: AppContext, args: argparse.Namespace) -> int:
    out = ctx.session().submit(args.value)
    if not out.success:
        print(out.errors[0].message)
        return 1
    if not out.correct:
        print("Not quite. Try again.")
        return 1

    print(f"Correct! Score: {out.score} (time {out.time_taken}s, hints {out.state.hints_used})")
    print(f"Streak: {ctx.activity_store.streak(ctx.clock.today())}")

    if ctx.rules.sync.enabled:
        _print_sync("Sync", asyncio.run(ctx.reconciler.push()))
    return 0


def handle_streak(ctx: AppContext, args: argparse.Namespace) -> int:
    print(ctx.activity_store.streak(ctx.clock.today()))
    return 0


HEATMAP_CELLS = ".1234"


def _print_heatmap(ctx: AppContext, year: int) -> int:
    """One row per month, one cell per day, shaded by score bucket."""
    activity = ctx.activity_store.load()
    for month in range(1, 13):
        _, days = calendar.monthrange(year, month)
        cells = "".join(
            HEATMAP_CELLS[activity_intensity(activity.get(date(year, month, d).isoformat()))]
            for d in range(1, days + 1)
        )
        print(f"{calendar.month_abbr[month]} {cells}")
    print(f"{len(solved_dates_in_year(activity, year))} days solved in {year}")
    return 0


def handle_stats(ctx: AppContext, args: argparse.Namespace) -> int:
    today = ctx.clock.today()
    if args.heatmap:
        return _print_heatmap(ctx, args.year or today.year)

    summary = ctx.activity_store.summary(today)
    state = ctx.session(today).state()
    left = remaining_hints(state.hints_used, ctx.rules.hints.max_per_day)

    if args.json:
        print(
            json.dumps(
                {
                    "puzzles_solved": summary.puzzles_solved,
                    "total_points": summary.total_points,
                    "best_score": summary.best_score,
                    "last_played": summary.last_played,
                    "streak": summary.streak,
                    "solved_today": state.completed,
                    "hints_left": left,
                }
            )
        )
        return 0

    print(f"Puzzles solved: {summary.puzzles_solved}")
    print(f"Total points:   {summary.total_points}")
    print(f"Best score:     {summary.best_score}")
    print(f"Last played:    {summary.last_played or '-'}")
    print(f"Streak:         {summary.streak}")
    print(f"Today:          {'solved' if state.completed else f'{left} hints left'}")
    return 0


def handle_sync(ctx: AppContext, args: argparse.Namespace) -> int:
    if args.direction == "push":
        result = asyncio.run(ctx.reconciler.push())
    else:
        result = asyncio.run(ctx.reconciler.pull())
    _print_sync(args.direction.capitalize(), result)
    return 0 if result.success or result.status is SyncStatus.NO_CREDENTIAL else 1


def handle_leaderboard(ctx: AppContext, args: argparse.Namespace) -> int:
    try:
        rows = asyncio.run(
            ctx.remote.fetch_leaderboard(args.timeframe, token=ctx.credentials.get_token())
        )
    except RemoteError as e:
        logger.error("Leaderboard unavailable: %s", e)
        return 1

    for row in rows:
        print(f"{row.rank:>3}. {row.display_name or row.user_id:<24} {row.total_score:>7} ({row.puzzles_solved} solved)")
    return 0


def handle_token(ctx: AppContext, args: argparse.Namespace) -> int:
    if args.action == "set":
        ctx.credentials.set_token(args.value)
        print("Token stored.")
    else:
        ctx.credentials.clear_token()
        print("Token cleared.")
    return 0


def handle_reset(ctx: AppContext, args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to reset without --yes.")
        return 1
    ctx.activity_store.reset()
    ctx.state_store.clear(ctx.clock.today())
    print("All progress reset.")
    return 0


HANDLERS = {
    "puzzle": handle_puzzle,
    "start": handle_start,
    "hint": handle_hint,
    "answer": handle_answer,
    "streak": handle_streak,
    "stats": handle_stats,
    "sync": handle_sync,
    "leaderboard": handle_leaderboard,
    "token": handle_token,
    "reset": handle_reset,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Logic Looper daily puzzle CLI")
    parser.add_argument("--rules", help="Path to rules.yaml")
    parser.add_argument("--today", help="Treat this ISO date as today")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # puzzle
    puzzle_parser = subparsers.add_parser("puzzle", help="Show a day's puzzle")
    puzzle_parser.add_argument("--date", help="ISO date (default: today)")
    puzzle_parser.add_argument("--json", action="store_true", help="Print as JSON")
    puzzle_parser.add_argument("--reveal", action="store_true", help="Include answer and rule")

    subparsers.add_parser("start", help="Start today's timer")
    subparsers.add_parser("hint", help="Reveal a hint for today's puzzle")

    answer_parser = subparsers.add_parser("answer", help="Submit an answer for today's puzzle")
    answer_parser.add_argument("value", type=int)

    subparsers.add_parser("streak", help="Print the current streak")

    stats_parser = subparsers.add_parser("stats", help="Show progress statistics")
    stats_parser.add_argument("--json", action="store_true")
    stats_parser.add_argument("--heatmap", action="store_true", help="Show the year activity heatmap")
    stats_parser.add_argument("--year", type=int, help="Heatmap year (default: this year)")

    sync_parser = subparsers.add_parser("sync", help="Sync with the scores server")
    sync_parser.add_argument("direction", choices=["push", "pull"])

    lb_parser = subparsers.add_parser("leaderboard", help="Show the leaderboard")
    lb_parser.add_argument("--timeframe", choices=["all", "week", "today"], default="all")

    token_parser = subparsers.add_parser("token", help="Store or clear the sync credential")
    token_sub = token_parser.add_subparsers(dest="action", required=True)
    token_set = token_sub.add_parser("set")
    token_set.add_argument("value")
    token_sub.add_parser("clear")

    reset_parser = subparsers.add_parser("reset", help="Delete all recorded progress")
    reset_parser.add_argument("--yes", action="store_true", help="Confirm")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    ctx = get_context(args)
    try:
        return HANDLERS[args.command](ctx, args)
    except StorageError as e:
        logger.error("Storage failure: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
