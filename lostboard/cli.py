from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .board import BoardApp
from .commands import categories as cmd_categories
from .commands import contact as cmd_contact
from .commands import delete as cmd_delete
from .commands import doctor as cmd_doctor
from .commands import export as cmd_export
from .commands import import_items as cmd_import
from .commands import matches as cmd_matches
from .commands import messages as cmd_messages
from .commands import post as cmd_post
from .commands import search as cmd_search
from .commands import show as cmd_show
from .config import load_settings
from .contact import ContactError
from .core.matching import MatchingError
from .store import StoreError

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lost-and-found bulletin board")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    post_parser = subparsers.add_parser("post", help="Post a lost or found item")
    post_parser.add_argument("type", choices=["lost", "found"], help="Listing type")
    post_parser.add_argument("title", help="Short title, e.g. 'black leather wallet'")
    post_parser.add_argument("--description", default="", help="Longer description")
    post_parser.add_argument("--category", default="", help="Category, e.g. Wallet")
    post_parser.add_argument("--location", default="", help="Where it was lost or found")
    post_parser.add_argument("--date", default=None, help="Date lost or found (YYYY-MM-DD)")
    post_parser.add_argument("--contact", default=None, help="Your contact; shown only as an alias")

    search_parser = subparsers.add_parser("search", help="Search and filter listings")
    search_parser.add_argument("query", nargs="?", default=None, help="Text to look for")
    search_parser.add_argument("--type", dest="item_type", choices=["lost", "found"], default=None)
    search_parser.add_argument("--category", default=None, help="Exact category filter")
    search_parser.add_argument("--page", type=positive_int, default=1, help="Page number (1-based)")
    search_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    show_parser = subparsers.add_parser("show", help="Show a single listing")
    show_parser.add_argument("item_id")

    matches_parser = subparsers.add_parser(
        "matches", help="Suggest opposite-type listings that may be the same item"
    )
    matches_parser.add_argument("item_id")
    matches_parser.add_argument("--limit", type=positive_int, default=None, help="Number of suggestions")
    matches_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    contact_parser = subparsers.add_parser("contact", help="Message the poster of a listing")
    contact_parser.add_argument("item_id")
    contact_parser.add_argument("body", help="Message text")
    contact_parser.add_argument("--from", dest="sender", default=None, help="Your contact; masked")

    delete_parser = subparsers.add_parser("delete", help="Remove a listing and its messages")
    delete_parser.add_argument("item_id")

    subparsers.add_parser("categories", help="List the categories in use")

    messages_parser = subparsers.add_parser("messages", help="List messages for a listing")
    messages_parser.add_argument("item_id")

    import_parser = subparsers.add_parser("import", help="Load listings from a JSON export")
    import_parser.add_argument("source", type=Path)

    export_parser = subparsers.add_parser("export", help="Write all listings as JSON")
    export_parser.add_argument("--out", type=Path, default=None)

    subparsers.add_parser("doctor", help="Run basic config/store checks")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = configure_logging(args.log_level)
    try:
        settings = load_settings(args.config)
    except FileNotFoundError as exc:
        raise SystemExit(str(exc))

    if args.command == "doctor":
        report = cmd_doctor.run(settings)
        for line in report.checks:
            print(line)
        if not report.ok:
            raise SystemExit(1)
        return

    app = BoardApp.create(settings)
    try:
        match args.command:
            case "post":
                cmd_post.run(
                    app,
                    item_type=args.type,
                    title=args.title,
                    description=args.description,
                    category=args.category,
                    location=args.location,
                    date=args.date,
                    contact=args.contact,
                )
            case "search":
                cmd_search.run(
                    app,
                    query=args.query,
                    item_type=args.item_type,
                    category=args.category,
                    page=args.page,
                    json_output=args.json,
                )
            case "show":
                cmd_show.run(app, item_id=args.item_id)
            case "matches":
                cmd_matches.run(app, item_id=args.item_id, limit=args.limit, json_output=args.json)
            case "contact":
                cmd_contact.run(app, item_id=args.item_id, body=args.body, sender=args.sender)
            case "messages":
                cmd_messages.run(app, item_id=args.item_id)
            case "delete":
                cmd_delete.run(app, item_id=args.item_id)
            case "categories":
                cmd_categories.run(app)
            case "import":
                cmd_import.run(app, source=args.source)
            case "export":
                cmd_export.run(app, out=args.out)
            case _:
                parser.error("Unknown command")
    except (MatchingError, StoreError, ContactError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    finally:
        app.close()
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")
