#!/usr/bin/env python3
"""
Terminal front end for the mood tracker.

    moodtracker-cli register alice s3cret
    moodtracker-cli log good --journal "walked the dog"
    moodtracker-cli stats
"""

import argparse
import logging
import sys

from moodtracker import config
from moodtracker.client.api import ApiError, MoodTrackerClient
from moodtracker.client.dashboard import Dashboard, MOOD_EMOJI
from moodtracker.client.session import FileStorage, Session
from moodtracker.dates import parse_timestamp
from moodtracker.models.mood_entry import MOODS


def format_date(value: str) -> str:
    return parse_timestamp(value).astimezone().strftime("%b %d, %Y, %I:%M %p")


def render_stats(dashboard: Dashboard) -> str:
    stats = dashboard.stats
    days = "day" if stats.current_streak == 1 else "days"
    return f"Total Points: {stats.total_points}\nCurrent Streak: {stats.current_streak} {days}"


def render_history(dashboard: Dashboard, username: str) -> str:
    if not dashboard.history:
        return f"No moods logged yet, {username}. Start by adding one!"
    lines = []
    for entry in dashboard.history:
        emoji = MOOD_EMOJI.get(entry.get("mood"), "❓")
        lines.append(f"{emoji} {entry.get('mood')}  {format_date(entry['date'])}")
        if entry.get("journal"):
            lines.append(f"    {entry['journal']}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="moodtracker-cli", description="Log your mood and keep your streak going")
    parser.add_argument("--base-url", default=config.API_URL, help="API base URL")
    parser.add_argument("--storage", default=config.STORAGE_PATH, help="File holding the saved session")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        p = sub.add_parser(name, help=f"{name.capitalize()} and remember the session")
        p.add_argument("username")
        p.add_argument("password")

    sub.add_parser("logout", help="Forget the saved session")

    p = sub.add_parser("log", help="Log today's mood")
    p.add_argument("mood", choices=MOODS)
    p.add_argument("--journal", default="", help="Optional journal text")

    sub.add_parser("history", help="Show mood history, newest first")
    sub.add_parser("stats", help="Show points and current streak")
    return parser


def run(args, client: MoodTrackerClient, out=sys.stdout) -> int:
    session = client.session

    if args.command in ("register", "login"):
        if not args.username or not args.password:
            raise ApiError("Username and password are required.")
        action = client.register if args.command == "register" else client.login
        auth = action(args.username, args.password)
        print(f"Welcome, {auth.username}!", file=out)
        return 0

    if args.command == "logout":
        client.logout()
        print("Logged out.", file=out)
        return 0

    dashboard = Dashboard(client)
    dashboard.refresh()

    if args.command == "log":
        if dashboard.submit(args.mood, args.journal) is None:
            raise ApiError(dashboard.error)
        print(dashboard.message, file=out)
        print(render_stats(dashboard), file=out)
    elif args.command == "history":
        print(render_history(dashboard, session.username), file=out)
    else:
        print(f"Welcome, {session.username}!", file=out)
        print(render_stats(dashboard), file=out)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    session = Session(FileStorage(args.storage))
    with MoodTrackerClient(session, base_url=args.base_url) as client:
        try:
            return run(args, client)
        except ApiError as e:
            print(f"❌ {e.message}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
