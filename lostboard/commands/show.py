from __future__ import annotations

from ..board import BoardApp
from .output import item_details


def run(app: BoardApp, *, item_id: str) -> None:
    item = app.get_item(item_id)
    for line in item_details(item):
        print(line)
    count = len(app.store.list_messages(item.id))
    if count:
        print(f"Messages: {count}")
