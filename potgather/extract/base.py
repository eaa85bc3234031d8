"""Extraction interfaces for language backends."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence

from ..merge import Workspace
from ..paths import PathPattern
from ..sources import SourceSpec

CASE_INSENSITIVE_FS = sys.platform == "win32"


@lru_cache(maxsize=None)
def _wildcard(pattern: str) -> PathPattern:
    return PathPattern.from_string(pattern)


class ExtractorError(RuntimeError):
    """Raised by a backend that could not process its files."""


@dataclass(slots=True)
class ExtractionResult:
    backend_id: str
    files: list[str] = field(default_factory=list)
    fragment: Path | None = None


class Extractor(ABC):
    """Interface for format-specific string extractors."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable backend identifier."""

    @abstractmethod
    def supported_extensions(self) -> Iterable[str]:
        """Return supported file wildcards, e.g. ``*.py``."""

    @abstractmethod
    def extract(self, workspace: Workspace, spec: SourceSpec, files: Sequence[str]) -> Path | None:
        """Extract strings from files into a fragment, or return None if nothing was produced."""

    def is_file_supported(self, path: str) -> bool:
        return any(_wildcard(ext).matches(path) for ext in self.supported_extensions())

    def filter_files(self, files: Sequence[str]) -> list[str]:
        """Return the subset of files this backend claims, in input order."""
        claimed: list[str] = []
        for path in files:
            candidate = path.lower() if CASE_INSENSITIVE_FS else path
            if self.is_file_supported(candidate):
                claimed.append(path)
        return claimed


__all__ = ["CASE_INSENSITIVE_FS", "ExtractionResult", "Extractor", "ExtractorError"]
