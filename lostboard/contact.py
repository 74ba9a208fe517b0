from __future__ import annotations

import datetime as dt
import hashlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .store import ItemStore

logger = logging.getLogger(__name__)

ANONYMOUS_ALIAS = "anonymous"


class ContactError(Exception):
    """Raised when a message cannot be delivered through the contact channel."""


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    item_id: str
    sender_alias: str
    body: str
    created_at: Optional[dt.datetime] = None

    def to_record(self) -> dict[str, object]:
        return {
            "id": self.id,
            "item_id": self.item_id,
            "sender_alias": self.sender_alias,
            "body": self.body,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def mask_contact(contact: Optional[str]) -> str:
    """Stable pseudonym for a contact string; the contact itself is never shown."""
    cleaned = (contact or "").strip().lower()
    if not cleaned:
        return ANONYMOUS_ALIAS
    digest = hashlib.sha256(cleaned.encode("utf-8")).hexdigest()
    return f"user-{digest[:8]}"


def send_message(
    store: "ItemStore",
    item_id: str,
    sender_contact: Optional[str],
    body: str,
    *,
    max_length: int = 1000,
) -> Message:
    item = store.get_item(item_id)
    if item is None:
        raise ContactError(f"No listing with id {item_id!r}")
    text = (body or "").strip()
    if not text:
        raise ContactError("Message body is empty")
    if len(text) > max_length:
        raise ContactError(f"Message is {len(text)} characters; the limit is {max_length}")
    message = store.add_message(item.id, mask_contact(sender_contact), text)
    logger.info("Delivered message %d for %s as %s", message.id, item.id, message.sender_alias)
    return message
