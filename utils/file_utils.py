"""Safe JSON loading helpers."""

import json
from pathlib import Path

from utils.log_utils import log


def load_json(path: str | Path) -> dict | list:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        return json.loads(p.read_text())
    except json.JSONDecodeError as exc:
        log("FILES", f"Ignoring malformed JSON in {p}: {exc}", "WARN")
        return {}
