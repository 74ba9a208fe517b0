from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from ..board import BoardApp


def run(app: BoardApp, *, out: Optional[Path] = None) -> None:
    records = app.export_records()
    text = json.dumps(records, indent=2, sort_keys=True)
    if out is None:
        print(text)
        return
    try:
        out.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"{out}: {exc}")
    print(f"Exported {len(records)} item(s) to {out}")
