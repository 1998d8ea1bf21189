"""Best-effort side files for postmortem of unparsable responses."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from walkthrough.io_utils import timestamp, write_output

logger = logging.getLogger(__name__)


class DiagnosticSink:
    """
    Writes the raw response and the extracted candidate next to each other.

    File names carry the local time at second resolution, so two responses
    saved within the same second overwrite each other. Nothing reads these
    files back; they are for humans.
    """

    def __init__(self, directory: Path, clock: Callable[[], datetime] = datetime.now) -> None:
        self._directory = directory
        self._clock = clock

    @property
    def directory(self) -> Path:
        return self._directory

    def save_raw_response(self, text: str) -> Path | None:
        return self._write(f"raw-llm-response-{timestamp(self._clock())}.txt", text)

    def save_candidate(self, text: str) -> Path | None:
        return self._write(f"extracted-json-{timestamp(self._clock())}.json", text)

    def _write(self, name: str, content: str) -> Path | None:
        path = self._directory / name
        try:
            write_output(path, content)
        except OSError as exc:
            logger.warning("Could not save diagnostic file %s: %s", path, exc)
            return None
        logger.info("Saved diagnostic file %s", path)
        return path
