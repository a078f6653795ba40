"""Shared file helpers for the JSON repositories.

Writes go to a temp file in the same directory and are renamed over the
target, so a crash mid-write leaves the previous contents intact.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from shopbot.domain.exceptions import StorageUnavailableError


def read_json(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise StorageUnavailableError(f"Cannot read {path.name}") from exc
    except json.JSONDecodeError as exc:
        raise StorageUnavailableError(f"Corrupt data file {path.name}") from exc


def write_json(path: Path, data: dict) -> None:
    try:
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp")
    except OSError as exc:
        raise StorageUnavailableError(f"Cannot write {path.name}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(temp_path, path)
    except OSError as exc:
        _discard(temp_path)
        raise StorageUnavailableError(f"Cannot write {path.name}") from exc


def _discard(temp_path: str) -> None:
    try:
        os.unlink(temp_path)
    except FileNotFoundError:
        pass
