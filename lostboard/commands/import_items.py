from __future__ import annotations

import json
from pathlib import Path

from ..board import BoardApp


def run(app: BoardApp, *, source: Path) -> None:
    try:
        with source.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SystemExit(f"{source}: {exc}")
    if isinstance(payload, dict):
        payload = payload.get("items", [])
    if not isinstance(payload, list):
        raise SystemExit(f"{source}: expected a JSON list of items")
    report = app.import_records(payload)
    print(f"Imported {report.imported} item(s), skipped {report.skipped}.")
    for line in report.errors:
        print(f"  - {line}")
