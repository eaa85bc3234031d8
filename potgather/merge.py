"""Combine partial templates into one catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, Sequence

from .gettext_tools import GettextTools, format_command, run_gettext
from .logging import get_logger

LOGGER = get_logger(__name__)

ToolRunner = Callable[..., bool]


class Workspace(Protocol):
    """Allocator of unique scratch file names."""

    def create_file_name(self, suggested: str) -> Path:
        ...


class CatalogMergeError(RuntimeError):
    """Raised when the catalog merge tool fails."""

    def __init__(self, command: Sequence[str]) -> None:
        self.command = [str(part) for part in command]
        super().__init__(f"Failed to merge gettext catalogs: {format_command(self.command)}")


class TemplateMerger:
    """Concatenate fragments with msgcat."""

    def __init__(
        self,
        workspace: Workspace,
        tools: GettextTools | None = None,
        *,
        runner: ToolRunner = run_gettext,
    ) -> None:
        self.workspace = workspace
        self.tools = tools or GettextTools()
        self.runner = runner

    def merge(self, fragments: Sequence[Path]) -> Path | None:
        """Return a single template covering every fragment.

        No fragments means nothing was extracted and yields ``None``; a single
        fragment is returned as is without running the merge tool.
        """
        if not fragments:
            return None
        if len(fragments) == 1:
            return fragments[0]

        outfile = self.workspace.create_file_name("concatenated.pot")
        command = [self.tools.msgcat, "--force-po", "-o", str(outfile), *(str(f) for f in fragments)]
        LOGGER.debug("merging %d fragments into %s", len(fragments), outfile)
        if not self.runner(command, timeout=self.tools.timeout):
            raise CatalogMergeError(command)
        LOGGER.debug("merged template written to %s", outfile)
        return outfile


__all__ = ["CatalogMergeError", "TemplateMerger", "ToolRunner", "Workspace"]
