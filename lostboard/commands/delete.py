from __future__ import annotations

from ..board import BoardApp


def run(app: BoardApp, *, item_id: str) -> None:
    app.remove_item(item_id)
    print(f"Removed listing {item_id} and its messages.")
