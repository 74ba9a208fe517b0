from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..contact import mask_contact
from ..core.matching import Item


@dataclass(frozen=True, slots=True)
class CheckLine:
    label: str
    status: str
    detail: Optional[str] = None

    def render(self) -> str:
        if self.detail:
            return f"{self.label}: {self.status} ({self.detail})"
        return f"{self.label}: {self.status}"


def ok(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "OK", detail).render()


def warning(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "WARNING", detail).render()


def error(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "ERROR", detail).render()


def item_line(item: Item, score: Optional[float] = None) -> str:
    tag = item.type.value.upper()
    parts = [f"[{tag}] {item.id}: {item.title or '<untitled>'}"]
    if item.category:
        parts.append(item.category)
    if item.location:
        parts.append(f"@ {item.location}")
    if item.date:
        parts.append(f"on {item.date.isoformat()}")
    line = " | ".join(parts)
    if score is not None:
        line = f"{line} (score {score:.2f})"
    return line


def item_details(item: Item) -> list[str]:
    return [
        f"Id: {item.id}",
        f"Type: {item.type.value}",
        f"Title: {item.title or '<untitled>'}",
        f"Description: {item.description or '<none>'}",
        f"Category: {item.category or '<none>'}",
        f"Location: {item.location or '<unknown>'}",
        f"Date: {item.date.isoformat() if item.date else '<unknown>'}",
        f"Posted by: {mask_contact(item.contact)}",
    ]
