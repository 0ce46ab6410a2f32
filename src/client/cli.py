#!/usr/bin/env python3
"""
Terminal calendar client.

Usage:
    calendar-app register alice
    calendar-app login alice
    calendar-app show --month 2025-03
    calendar-app add --smart "standup tomorrow at 9:30"
    calendar-app add --title "Dentist" --date 2025-03-14 --time 16:00 --color bg-red-500
    calendar-app edit <event-id> --time 10:00
    calendar-app delete <event-id>
    calendar-app logout
"""

import argparse
import getpass
import logging
import sys
import uuid
from datetime import date, datetime

from client.gateway import CalendarGateway
from client.session import SessionStore
from core.config import (
    CLIENT_LOG_LEVEL,
    DEFAULT_EVENT_COLOR,
    DEFAULT_EVENT_TIME,
    EVENT_COLORS,
)
from core.validation import validate_event
from models.events import CalendarEvent, User
from services.calendar import (
    MONTHS,
    WEEKDAYS,
    month_grid,
    next_month,
    prev_month,
)

CELL_WIDTH = 5
EVENT_FIELDS = ("title", "description", "date", "time", "color")


# =============================================================================
# RENDERING
# =============================================================================


def render_month(
    year: int, month: int, events: list[CalendarEvent], today: date | None = None
) -> str:
    """
    Render a Monday-first month grid followed by the month's events.

    Today is bracketed, days with events carry a '*'.
    """
    grid = month_grid(year, month, events, today)
    width = CELL_WIDTH * 7

    lines = [f"{MONTHS[month - 1]} {year}".center(width).rstrip()]
    lines.append("".join(name.center(CELL_WIDTH) for name in WEEKDAYS).rstrip())

    for week in grid:
        row = []
        for cell in week:
            if cell is None:
                row.append(" " * CELL_WIDTH)
                continue
            label = f"[{cell['day']}]" if cell["is_today"] else str(cell["day"])
            if cell["events"]:
                label += "*"
            row.append(label.center(CELL_WIDTH))
        lines.append("".join(row).rstrip())

    agenda = [cell for week in grid for cell in week if cell and cell["events"]]
    if agenda:
        lines.append("")
        for cell in agenda:
            lines.append(f"{cell['date']}")
            for event in cell["events"]:
                lines.append(f"  {event['time']}  {event['title']}  ({event['id']})")
    else:
        lines.append("")
        lines.append("No events this month.")

    return "\n".join(lines)


# =============================================================================
# ARGUMENTS
# =============================================================================


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM for argparse."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month '{value}', expected YYYY-MM")
    return parsed.year, parsed.month


def add_event_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", help="Event title")
    parser.add_argument("--description", help="Event description")
    parser.add_argument("--date", help="Event date (YYYY-MM-DD)")
    parser.add_argument("--time", help="Event time (HH:mm, 24h)")
    parser.add_argument("--color", choices=EVENT_COLORS, help="Event color tag")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calendar-app", description="Personal calendar")
    parser.add_argument("--api-url", help="Backend API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        auth = subparsers.add_parser(name, help=f"{name.capitalize()} a user")
        auth.add_argument("username")
        auth.add_argument("--password", help="Password (prompted if omitted)")

    subparsers.add_parser("logout", help="Forget the current session")
    subparsers.add_parser("whoami", help="Show the logged-in user")

    show = subparsers.add_parser("show", help="Show a month")
    show.add_argument("--month", type=parse_month, help="Month to show (YYYY-MM), default current")
    step = show.add_mutually_exclusive_group()
    step.add_argument("--prev", action="store_true", help="Show the month before --month")
    step.add_argument("--next", action="store_true", help="Show the month after --month")

    add = subparsers.add_parser("add", help="Create an event")
    add.add_argument("--smart", metavar="TEXT", help="Describe the event in plain words")
    add_event_field_arguments(add)

    edit = subparsers.add_parser("edit", help="Edit an event")
    edit.add_argument("event_id")
    add_event_field_arguments(edit)

    delete = subparsers.add_parser("delete", help="Delete an event")
    delete.add_argument("event_id")
    delete.add_argument("--yes", action="store_true", help="Skip confirmation")

    return parser


# =============================================================================
# COMMANDS
# =============================================================================


def require_session(session_store: SessionStore) -> User | None:
    user = session_store.get_session()
    if user is None:
        print("Not logged in. Run 'calendar-app login USERNAME' first.", file=sys.stderr)
    return user


def apply_overrides(fields: dict, args: argparse.Namespace) -> dict:
    for name in EVENT_FIELDS:
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    return fields


def save_and_show(
    gateway: CalendarGateway, user: User, event: CalendarEvent, today: date
) -> int:
    """Validate, save, then reload the event list from the backend."""
    errors = validate_event(event)
    if errors:
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return 1

    if not gateway.save_event(event):
        print("Could not save the event. Please try again.", file=sys.stderr)
        return 1

    event_date = datetime.strptime(event["date"], "%Y-%m-%d").date()
    events = gateway.get_events(user["id"])
    print(f"Saved '{event['title']}' ({event['id']})")
    print()
    print(render_month(event_date.year, event_date.month, events, today))
    return 0


def cmd_auth(args, gateway: CalendarGateway, session_store: SessionStore) -> int:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    if not args.username or not password:
        print("Please fill in all fields.", file=sys.stderr)
        return 1

    if args.command == "login":
        user = gateway.login_user(args.username, password)
        if user is None:
            print("Invalid username or password.", file=sys.stderr)
            return 1
    else:
        user = gateway.register_user(args.username, password)
        if user is None:
            print("Username already exists.", file=sys.stderr)
            return 1

    session_store.persist_session(user)
    print(f"Welcome, {user['username']}!")
    return 0


def cmd_show(args, gateway: CalendarGateway, session_store: SessionStore, today: date) -> int:
    user = require_session(session_store)
    if user is None:
        return 1

    year, month = args.month or (today.year, today.month)
    if args.prev:
        year, month = prev_month(year, month)
    elif args.next:
        year, month = next_month(year, month)

    events = gateway.get_events(user["id"])
    print(render_month(year, month, events, today))
    return 0


def cmd_add(args, gateway: CalendarGateway, session_store: SessionStore, today: date) -> int:
    user = require_session(session_store)
    if user is None:
        return 1

    fields = {
        "title": "",
        "description": "",
        "date": today.isoformat(),
        "time": DEFAULT_EVENT_TIME,
        "color": DEFAULT_EVENT_COLOR,
    }

    if args.smart:
        parsed = gateway.parse_natural_language_event(args.smart, today)
        if parsed:
            fields.update(parsed)
        else:
            print(
                "Warning: could not understand the text, fill in the fields manually.",
                file=sys.stderr,
            )

    apply_overrides(fields, args)
    if not fields["title"].strip():
        print("A title is required (use --title).", file=sys.stderr)
        return 1

    event: CalendarEvent = {"id": str(uuid.uuid4()), "userId": user["id"], **fields}
    return save_and_show(gateway, user, event, today)


def cmd_edit(args, gateway: CalendarGateway, session_store: SessionStore, today: date) -> int:
    user = require_session(session_store)
    if user is None:
        return 1

    existing = next(
        (e for e in gateway.get_events(user["id"]) if e["id"] == args.event_id), None
    )
    if existing is None:
        print(
            f"Event {args.event_id} not found (or the server could not be reached).",
            file=sys.stderr,
        )
        return 1

    event = apply_overrides(dict(existing), args)
    return save_and_show(gateway, user, event, today)


def cmd_delete(args, gateway: CalendarGateway, session_store: SessionStore, today: date) -> int:
    user = require_session(session_store)
    if user is None:
        return 1

    if not args.yes:
        answer = input(f"Are you sure you want to delete event {args.event_id}? [y/N] ")
        if answer.strip().lower() not in {"y", "yes"}:
            print("Cancelled.")
            return 0

    if not gateway.delete_event(args.event_id):
        print("Could not delete the event. Please try again.", file=sys.stderr)
        return 1

    events = gateway.get_events(user["id"])
    print(f"Deleted {args.event_id}")
    print()
    print(render_month(today.year, today.month, events, today))
    return 0


def main(
    argv: list[str] | None = None,
    gateway: CalendarGateway | None = None,
    session_store: SessionStore | None = None,
    today: date | None = None,
) -> int:
    logging.basicConfig(
        level=getattr(logging, CLIENT_LOG_LEVEL, logging.WARNING),
        format="[%(asctime)s] [%(levelname)-7s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    args = build_parser().parse_args(argv)
    session_store = session_store or SessionStore()
    today = today or date.today()

    if args.command == "logout":
        session_store.clear_session()
        print("Logged out.")
        return 0
    if args.command == "whoami":
        user = require_session(session_store)
        if user is None:
            return 1
        print(f"{user['username']} ({user['id']})")
        return 0

    owns_gateway = gateway is None
    gateway = gateway or CalendarGateway(base_url=args.api_url)
    try:
        if args.command in ("register", "login"):
            return cmd_auth(args, gateway, session_store)
        if args.command == "show":
            return cmd_show(args, gateway, session_store, today)
        if args.command == "add":
            return cmd_add(args, gateway, session_store, today)
        if args.command == "edit":
            return cmd_edit(args, gateway, session_store, today)
        return cmd_delete(args, gateway, session_store, today)
    finally:
        if owns_gateway:
            gateway.close()


if __name__ == "__main__":
    sys.exit(main())
