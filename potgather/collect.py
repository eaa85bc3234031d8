"""Enumerate the source files an extraction run operates on."""

from __future__ import annotations

import os

from .logging import get_logger
from .paths import ExclusionSet, normalize_path
from .sources import CURRENT_DIRECTORY, SourceSpec

LOGGER = get_logger(__name__)


class FileCollector:
    """Walk search paths and return a sorted, deduplicated list of files."""

    def collect(self, spec: SourceSpec) -> list[str]:
        spec.ensure_supported()
        exclusions = spec.exclusions

        output: list[str] = []
        for entry in spec.search_paths:
            path = normalize_path(entry)
            if not path:
                LOGGER.debug("ignoring empty search path entry")
                continue
            if os.path.isfile(path):
                if exclusions.is_excluded(path):
                    LOGGER.debug("no files found in '%s'", entry)
                    continue
                output.append(path)
            elif path != CURRENT_DIRECTORY and exclusions.is_excluded(path):
                LOGGER.debug("no files found in '%s' (excluded)", entry)
            elif not self._find_in_dir(path, exclusions, output):
                LOGGER.debug("no files found in '%s'", entry)

        # Directory enumeration order depends on the filesystem; the file list
        # order ends up in the generated template, so it must be stable.
        return sorted(set(output))

    def _find_in_dir(self, dirname: str, exclusions: ExclusionSet, output: list[str]) -> int:
        filenames: list[str] = []
        subdirs: list[str] = []
        try:
            with os.scandir(dirname) as iterator:
                for entry in iterator:
                    try:
                        if entry.is_file():
                            filenames.append(entry.name)
                        elif entry.is_dir(follow_symlinks=False):
                            subdirs.append(entry.name)
                    except OSError as exc:
                        LOGGER.debug("skipping unreadable entry '%s': %s", entry.path, exc)
        except OSError as exc:
            LOGGER.debug("cannot read directory '%s': %s", dirname, exc)
            return 0

        found = 0
        for name in filenames:
            path = self._child_path(dirname, name)
            if exclusions.is_excluded(path):
                continue
            output.append(path)
            found += 1

        for name in subdirs:
            path = self._child_path(dirname, name)
            if exclusions.is_excluded(path):
                continue
            found += self._find_in_dir(path, exclusions, output)

        return found

    @staticmethod
    def _child_path(dirname: str, name: str) -> str:
        return name if dirname == CURRENT_DIRECTORY else f"{dirname}/{name}"


def collect_all_files(spec: SourceSpec) -> list[str]:
    """Return every non-excluded file reachable from the spec's search paths."""
    return FileCollector().collect(spec)


__all__ = ["FileCollector", "collect_all_files"]
