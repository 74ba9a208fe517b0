from __future__ import annotations

import json
from typing import Optional

from ..board import BoardApp
from ..core.matching import ItemType
from .output import item_line


def run(
    app: BoardApp,
    *,
    query: Optional[str] = None,
    item_type: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    json_output: bool = False,
) -> None:
    parsed_type = ItemType.parse(item_type) if item_type else None
    result = app.browse(query=query, item_type=parsed_type, category=category, page=page)
    if json_output:
        payload = {
            "page": result.page,
            "pages": result.pages,
            "total": result.total,
            "items": [item.to_record() for item in result.items],
        }
        for record in payload["items"]:
            record.pop("contact", None)
        print(json.dumps(payload, indent=2, sort_keys=True))
        return
    if not result.items:
        print("No listings found.")
        return
    for item in result.items:
        print(item_line(item))
    print(f"Page {result.page}/{result.pages} ({result.total} listing(s))")
