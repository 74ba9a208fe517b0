"""
Domain models for lost/found matching.

These are pure data models with no dependencies beyond the standard library.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import DateParseError, InvalidItemError

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})(?:[T ].*)?$")

TEXT_FIELDS = ("title", "description", "category", "location")


class ItemType(Enum):
    LOST = "lost"
    FOUND = "found"

    def opposite(self) -> "ItemType":
        return ItemType.FOUND if self is ItemType.LOST else ItemType.LOST

    @classmethod
    def parse(cls, value: object) -> "ItemType":
        if isinstance(value, ItemType):
            return value
        if value is None:
            raise InvalidItemError("item type is required")
        cleaned = str(value).strip().lower()
        for member in cls:
            if member.value == cleaned:
                return member
        raise InvalidItemError(f"unknown item type {value!r}; expected 'lost' or 'found'")


@dataclass(frozen=True, slots=True)
class Item:
    """
    A single lost or found listing.

    The matching core only reads ``type``, ``date`` and the four text
    fields. ``contact`` belongs to the contact channel and is never shown
    verbatim; ``created_at`` is stamped by the store.
    """

    id: str
    type: ItemType
    title: str = ""
    description: str = ""
    category: str = ""
    location: str = ""
    date: Optional[dt.date] = None
    contact: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    def __post_init__(self) -> None:
        if self.date is not None and type(self.date) is not dt.date:
            object.__setattr__(self, "date", coerce_item_date(self.date))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Item":
        """
        Build an Item from a plain record such as a JSON export entry.

        Raises:
            InvalidItemError: if ``id`` or ``type`` is missing/blank or the
                type is not ``lost``/``found``.
        """
        if not isinstance(record, Mapping):
            raise InvalidItemError(f"item record must be a mapping, got {type(record).__name__}")
        raw_id = record.get("id")
        item_id = _text(raw_id).strip()
        if not item_id:
            raise InvalidItemError("item id is required")
        item_type = ItemType.parse(record.get("type"))
        contact = _text(record.get("contact")).strip() or None
        return cls(
            id=item_id,
            type=item_type,
            title=_text(record.get("title")),
            description=_text(record.get("description")),
            category=_text(record.get("category")),
            location=_text(record.get("location")),
            date=coerce_item_date(record.get("date")),
            contact=contact,
            created_at=_parse_timestamp(record.get("created_at")),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "location": self.location,
            "date": self.date.isoformat() if self.date else None,
            "contact": self.contact,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True, slots=True)
class MatchResult:
    """A ranked candidate: the candidate's id and its composite score."""

    item_id: str
    score: float


def parse_item_date(value: object) -> dt.date:
    """
    Parse a reported date into a calendar date.

    Accepts ``date`` and ``datetime`` objects (the latter reduced to its
    calendar date) and ISO strings ``YYYY-MM-DD`` with an optional
    ``T``/space separated time part that is ignored.

    Raises:
        DateParseError: for anything else, including impossible dates.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise DateParseError(f"unsupported date value {value!r}")
    match = ISO_DATE_PATTERN.match(value.strip())
    if not match:
        raise DateParseError(f"not an ISO date: {value!r}")
    try:
        return dt.date(int(match.group("year")), int(match.group("month")), int(match.group("day")))
    except ValueError as exc:
        raise DateParseError(f"invalid calendar date {value!r}: {exc}") from exc


def coerce_item_date(value: object) -> Optional[dt.date]:
    """Like parse_item_date, but absent or unparseable values become ``None``."""
    if value is None or value == "":
        return None
    try:
        return parse_item_date(value)
    except DateParseError as exc:
        logger.debug("Ignoring unparseable item date: %s", exc)
        return None


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _parse_timestamp(value: object) -> Optional[dt.datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value.strip())
        except ValueError:
            logger.debug("Ignoring unparseable created_at %r", value)
            return None
    return None
