from __future__ import annotations

from typing import Optional

from ..board import BoardApp


def run(
    app: BoardApp,
    *,
    item_type: str,
    title: str,
    description: str = "",
    category: str = "",
    location: str = "",
    date: Optional[str] = None,
    contact: Optional[str] = None,
) -> None:
    result = app.submit_item(
        {
            "type": item_type,
            "title": title,
            "description": description,
            "category": category,
            "location": location,
            "date": date,
            "contact": contact,
        }
    )
    print(f"Posted {result.item.type.value} item {result.item.id}.")
    if date and result.item.date is None:
        print(f"Note: could not read date {date!r}; expected YYYY-MM-DD.")
    notice = result.notice()
    if notice:
        print(f"{notice}. Run `lostboard matches {result.item.id}` to review them.")
