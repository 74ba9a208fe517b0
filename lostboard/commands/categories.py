from __future__ import annotations

from ..board import BoardApp


def run(app: BoardApp) -> None:
    names = app.categories()
    if not names:
        print("No categories yet.")
        return
    for name in names:
        print(name)
