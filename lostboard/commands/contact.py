from __future__ import annotations

from typing import Optional

from ..board import BoardApp


def run(app: BoardApp, *, item_id: str, body: str, sender: Optional[str] = None) -> None:
    message = app.contact(item_id, sender, body)
    print(f"Message sent to the poster of {item_id} as {message.sender_alias}.")
