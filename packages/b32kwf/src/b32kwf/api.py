from __future__ import annotations
import json, os
from pathlib import Path
from typing import Any

def atomic_write(path: Path | str, data: bytes) -> None:
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)

def atomic_write_text(path: Path | str, text: str) -> None:
    # UTF-8 sans BOM ni newline final : le texte encodé doit rester exact
    atomic_write(path, text.encode("utf-8"))

def jsonl_append(path: Path | str, obj: dict[str, Any]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False) + "\n")
