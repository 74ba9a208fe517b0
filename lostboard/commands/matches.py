from __future__ import annotations

import json
from typing import Optional

from ..board import BoardApp
from .output import item_line


def run(
    app: BoardApp,
    *,
    item_id: str,
    limit: Optional[int] = None,
    json_output: bool = False,
) -> None:
    suggestions = app.suggest_matches(item_id, limit=limit)
    if json_output:
        payload = [{"id": match.item.id, "score": round(match.score, 6)} for match in suggestions]
        print(json.dumps(payload, indent=2))
        return
    if not suggestions:
        print(f"No possible matches for {item_id}.")
        return
    print(f"Possible matches for {item_id}:")
    for idx, match in enumerate(suggestions, 1):
        print(f"  {idx}. {item_line(match.item, match.score)}")
