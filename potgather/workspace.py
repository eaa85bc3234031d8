"""Scratch directory for intermediate extraction artifacts."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from .logging import get_logger

LOGGER = get_logger(__name__)


class TempDirectory:
    """Temporary directory handing out unique file names.

    Every name issued by :meth:`create_file_name` carries a per-directory
    counter prefix, so two requests for the same suggested name never collide.
    """

    def __init__(self, *, keep: bool = False, prefix: str = "potgather") -> None:
        self.path = Path(tempfile.mkdtemp(prefix=prefix))
        self.keep = keep
        self._counter = 0
        LOGGER.debug("created workspace %s", self.path)

    def create_file_name(self, suggested: str) -> Path:
        self._counter += 1
        return self.path / f"{self._counter}{Path(suggested).name}"

    def cleanup(self) -> None:
        if self.keep:
            LOGGER.info("Keeping intermediate files in %s", self.path)
            return
        shutil.rmtree(self.path, ignore_errors=True)

    def __enter__(self) -> "TempDirectory":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.cleanup()


__all__ = ["TempDirectory"]
