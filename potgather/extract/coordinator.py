"""Dispatch files to backends and merge the fragments they produce."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ..logging import get_logger
from ..merge import CatalogMergeError, TemplateMerger, Workspace
from ..paths import display_path
from ..sources import SourceSpec
from .base import ExtractionResult, ExtractorError
from .registry import ExtractorRegistry

LOGGER = get_logger(__name__)


def sorted_difference(files: Sequence[str], claimed: Sequence[str]) -> list[str]:
    """Return ``files`` without the entries of ``claimed``.

    Both sequences must be sorted; the result is produced in a single pass and
    stays sorted.
    """
    remaining: list[str] = []
    index = 0
    total = len(claimed)
    for path in files:
        while index < total and claimed[index] < path:
            index += 1
        if index < total and claimed[index] == path:
            index += 1
            continue
        remaining.append(path)
    return remaining


@dataclass(slots=True)
class ExtractionReport:
    results: list[ExtractionResult] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)
    template: Path | None = None
    merge_error: CatalogMergeError | None = None

    @property
    def fragments(self) -> list[Path]:
        return [result.fragment for result in self.results if result.fragment is not None]

    @property
    def failed(self) -> bool:
        return self.merge_error is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "template": display_path(str(self.template)) if self.template else None,
            "backends": [
                {
                    "id": result.backend_id,
                    "files": [display_path(path) for path in result.files],
                    "fragment": display_path(str(result.fragment)) if result.fragment else None,
                }
                for result in self.results
            ],
            "unmatched": [display_path(path) for path in self.unmatched],
            "merge_error": display_path(str(self.merge_error)) if self.merge_error else None,
        }


class ExtractionCoordinator:
    """Run every registered backend over the files it claims."""

    def __init__(
        self,
        registry: ExtractorRegistry,
        workspace: Workspace,
        spec: SourceSpec,
        merger: TemplateMerger | None = None,
    ) -> None:
        self.registry = registry
        self.workspace = workspace
        self.spec = spec
        self.merger = merger or TemplateMerger(workspace)

    def run(self, files: Sequence[str]) -> ExtractionReport:
        """Extract from files and return a report of what every backend did.

        The residual bookkeeping relies on a sorted file list, as produced by
        :class:`~potgather.collect.FileCollector`; input is sorted once here so
        callers passing arbitrary order still get each file claimed at most once.
        """
        report = ExtractionReport()
        remaining = sorted(files)
        LOGGER.debug("extracting from %d files", len(remaining))

        for extractor in self.registry:
            claimed = extractor.filter_files(remaining)
            if not claimed:
                continue

            LOGGER.debug(" .. using extractor '%s' for %d files", extractor.id, len(claimed))
            try:
                fragment = extractor.extract(self.workspace, self.spec, claimed)
            except ExtractorError as exc:
                LOGGER.error("Extractor '%s' failed: %s", extractor.id, exc)
                fragment = None
            report.results.append(ExtractionResult(backend_id=extractor.id, files=claimed, fragment=fragment))

            if len(claimed) >= len(remaining):
                remaining = []
                break
            remaining = sorted_difference(remaining, claimed)

        report.unmatched = remaining
        fragments = report.fragments
        LOGGER.debug(
            "extraction finished with %d unrecognized files and %d fragments",
            len(remaining),
            len(fragments),
        )

        try:
            report.template = self.merger.merge(fragments)
        except CatalogMergeError as exc:
            LOGGER.error("%s", exc)
            report.merge_error = exc
            report.template = None
        return report

    def extract_all(self, files: Sequence[str]) -> Path | None:
        """Return the merged template, or None when there is nothing usable."""
        return self.run(files).template


__all__ = ["ExtractionCoordinator", "ExtractionReport", "sorted_difference"]
