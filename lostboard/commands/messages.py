from __future__ import annotations

from ..board import BoardApp


def run(app: BoardApp, *, item_id: str) -> None:
    messages = app.messages(item_id)
    if not messages:
        print(f"No messages for {item_id}.")
        return
    for message in messages:
        stamp = message.created_at.isoformat(sep=" ") if message.created_at else "?"
        print(f"[{message.id}] {stamp} {message.sender_alias}: {message.body}")
