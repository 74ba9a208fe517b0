from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from .config import Settings
from .contact import Message, send_message
from .core.matching import InvalidItemError, Item, ItemType, rank_matches
from .store import DuplicateItemError, ItemNotFoundError, ItemStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    item: Item
    match_count: int

    def notice(self) -> Optional[str]:
        if not self.match_count:
            return None
        noun = "match" if self.match_count == 1 else "matches"
        return f"{self.match_count} possible {noun} found for your {self.item.type.value} item"


@dataclass(frozen=True, slots=True)
class SuggestedMatch:
    item: Item
    score: float


@dataclass(slots=True)
class Page:
    items: list[Item]
    page: int
    pages: int
    total: int


@dataclass(slots=True)
class ImportReport:
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class BoardApp:
    """Application state for one board: its settings and its item store."""

    settings: Settings
    store: ItemStore

    @classmethod
    def create(cls, settings: Settings) -> "BoardApp":
        store = ItemStore(settings.store.path)
        return cls(settings=settings, store=store)

    def submit_item(self, record: Mapping[str, Any]) -> SubmissionResult:
        payload = dict(record)
        if not str(payload.get("id") or "").strip():
            item_type = ItemType.parse(payload.get("type"))
            payload["id"] = f"{item_type.value}_{uuid.uuid4().hex[:8]}"
        item = Item.from_record(payload)
        if not item.title.strip():
            raise InvalidItemError("item title is required")
        stored = self.store.add_item(item)
        pool = self.store.list_items(stored.type.opposite())
        match_count = len(rank_matches(stored, pool))
        logger.info(
            "Posted %s item %s (%d possible match%s)",
            stored.type.value,
            stored.id,
            match_count,
            "" if match_count == 1 else "es",
        )
        return SubmissionResult(item=stored, match_count=match_count)

    def get_item(self, item_id: str) -> Item:
        item = self.store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(f"No listing with id {item_id!r}")
        return item

    def suggest_matches(self, item_id: str, limit: Optional[int] = None) -> list[SuggestedMatch]:
        seed = self.get_item(item_id)
        pool = self.store.list_items(seed.type.opposite())
        by_id = {candidate.id: candidate for candidate in pool}
        top = limit if limit is not None else self.settings.board.suggestion_limit
        if top < 1:
            raise ValueError(f"suggestion limit must be at least 1, got {top}")
        ranked = rank_matches(seed, pool)
        return [SuggestedMatch(item=by_id[result.item_id], score=result.score) for result in ranked[:top]]

    def browse(
        self,
        query: Optional[str] = None,
        item_type: Optional[ItemType] = None,
        category: Optional[str] = None,
        page: int = 1,
    ) -> Page:
        page_size = self.settings.board.page_size
        total = self.store.count(query=query, item_type=item_type, category=category)
        pages = max(1, math.ceil(total / page_size))
        current = min(max(1, page), pages)
        items = self.store.search(
            query=query,
            item_type=item_type,
            category=category,
            limit=page_size,
            offset=(current - 1) * page_size,
        )
        return Page(items=items, page=current, pages=pages, total=total)

    def remove_item(self, item_id: str) -> None:
        if not self.store.delete_item(item_id):
            raise ItemNotFoundError(f"No listing with id {item_id!r}")
        logger.info("Removed item %s", item_id)

    def categories(self) -> list[str]:
        return self.store.categories()

    def contact(self, item_id: str, sender_contact: Optional[str], body: str) -> Message:
        return send_message(
            self.store,
            item_id,
            sender_contact,
            body,
            max_length=self.settings.board.max_message_length,
        )

    def messages(self, item_id: str) -> list[Message]:
        self.get_item(item_id)
        return self.store.list_messages(item_id)

    def import_records(self, records: Iterable[Any]) -> ImportReport:
        report = ImportReport()
        for index, record in enumerate(records):
            try:
                item = Item.from_record(record)
                self.store.add_item(item)
            except (InvalidItemError, DuplicateItemError) as exc:
                report.skipped += 1
                report.errors.append(f"record {index}: {exc}")
                logger.warning("Skipping record %d: %s", index, exc)
                continue
            report.imported += 1
        logger.info("Imported %d item(s), skipped %d", report.imported, report.skipped)
        return report

    def export_records(self) -> list[dict[str, Any]]:
        return [item.to_record() for item in reversed(self.store.list_items())]

    def close(self) -> None:
        self.store.close()
