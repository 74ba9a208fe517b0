from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..board import BoardApp
from ..config import Settings
from ..core.matching import ItemType
from .output import error, ok as ok_line, warning


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def _undated_lines(app: BoardApp) -> list[str]:
    items = app.store.list_items()
    undated = [item for item in items if item.date is None]
    if not undated:
        return [ok_line("Item dates", "all listings dated")]
    # Undated listings never earn the date proximity bonus when matching.
    return [warning("Item dates", f"{len(undated)} listing(s) without a readable date")]


def run(settings: Settings) -> DoctorReport:
    checks: list[str] = []
    ok = True

    store_path = Path(settings.store.path)
    try:
        app = BoardApp.create(settings)
    except Exception as exc:
        return DoctorReport(ok=False, checks=[error("Store", f"{store_path}: {exc}")])
    try:
        checks.append(ok_line("Store", str(store_path)))

        lost = app.store.count(item_type=ItemType.LOST)
        found = app.store.count(item_type=ItemType.FOUND)
        checks.append(ok_line("Listings", f"{lost} lost, {found} found"))
        if (lost and not found) or (found and not lost):
            checks.append(warning("Matching", "only one item type posted; nothing to match against"))

        checks.extend(_undated_lines(app))

        board = settings.board
        if board.suggestion_limit > board.page_size:
            checks.append(
                warning(
                    "Board",
                    f"suggestion_limit {board.suggestion_limit} exceeds page_size {board.page_size}",
                )
            )
        else:
            checks.append(
                ok_line(
                    "Board",
                    f"page_size={board.page_size}, suggestion_limit={board.suggestion_limit}",
                )
            )
    except Exception as exc:
        ok = False
        checks.append(error("Store", str(exc)))
    finally:
        app.close()

    return DoctorReport(ok=ok, checks=checks)
