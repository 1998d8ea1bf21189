"""Input/output helpers."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel


def read_input(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(path)
    return path.read_text(encoding="utf-8")


def ensure_parent_dir(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def write_output(path: Path, content: str) -> Path:
    ensure_parent_dir(path).write_text(content, encoding="utf-8")
    return path


def dump_json(model: BaseModel) -> str:
    """Pretty-printed JSON with wire names, in declared field order."""
    return model.model_dump_json(by_alias=True, indent=2)


def timestamp(now: datetime | None = None) -> str:
    """Local time at second resolution, e.g. 20250101-093000."""
    return (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
