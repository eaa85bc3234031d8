"""Ordered collection of extractor backends."""

from __future__ import annotations

from typing import Iterable, Iterator

from ..gettext_tools import GettextTools, run_gettext
from ..merge import ToolRunner
from .base import Extractor
from .xgettext import create_language_extractors


class ExtractorRegistry:
    """Backends in priority order; the first one to claim a file processes it."""

    def __init__(self, extractors: Iterable[Extractor]) -> None:
        self._extractors = tuple(extractors)
        ids = [extractor.id for extractor in self._extractors]
        duplicates = sorted({value for value in ids if ids.count(value) > 1})
        if duplicates:
            raise ValueError(f"Duplicate extractor ids: {', '.join(duplicates)}")

    def __iter__(self) -> Iterator[Extractor]:
        return iter(self._extractors)

    def __len__(self) -> int:
        return len(self._extractors)

    def ids(self) -> list[str]:
        return [extractor.id for extractor in self._extractors]

    def get(self, extractor_id: str) -> Extractor:
        for extractor in self._extractors:
            if extractor.id == extractor_id:
                return extractor
        raise KeyError(extractor_id)

    def select(self, extractor_ids: Iterable[str]) -> "ExtractorRegistry":
        """Return a registry limited to the given ids, keeping priority order."""
        wanted = set(extractor_ids)
        unknown = wanted.difference(self.ids())
        if unknown:
            raise KeyError(", ".join(sorted(unknown)))
        return ExtractorRegistry(extractor for extractor in self._extractors if extractor.id in wanted)


def create_all_extractors(
    tools: GettextTools | None = None,
    *,
    runner: ToolRunner = run_gettext,
) -> ExtractorRegistry:
    """Return the default backends."""
    return ExtractorRegistry(create_language_extractors(tools, runner=runner))


__all__ = ["ExtractorRegistry", "create_all_extractors"]
