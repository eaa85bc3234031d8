"""Backends driving GNU xgettext, one per source language."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..gettext_tools import GettextTools, run_gettext
from ..logging import get_logger
from ..merge import ToolRunner, Workspace
from ..sources import SourceSpec
from .base import Extractor

LOGGER = get_logger(__name__)

TRANSLATOR_COMMENT_TAG = "TRANSLATORS:"


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    id: str
    language: str
    extensions: tuple[str, ...]
    keywords: tuple[str, ...] = ()


# Order matters: a file claimed by an earlier language is not offered to later ones.
LANGUAGES: tuple[LanguageDefinition, ...] = (
    LanguageDefinition(
        "cxx",
        "C++",
        ("*.c", "*.cpp", "*.cc", "*.cxx", "*.c++", "*.h", "*.hpp", "*.hh", "*.hxx", "*.h++"),
        ("_", "N_", "wxTRANSLATE", "wxPLURAL:1,2"),
    ),
    LanguageDefinition("csharp", "C#", ("*.cs",)),
    LanguageDefinition("objc", "ObjectiveC", ("*.m", "*.mm"), ("_", "NSLocalizedString")),
    LanguageDefinition("vala", "Vala", ("*.vala", "*.vapi")),
    LanguageDefinition("java", "Java", ("*.java",)),
    LanguageDefinition("javascript", "JavaScript", ("*.js", "*.jsx", "*.mjs", "*.cjs"), ("__", "_n:1,2")),
    LanguageDefinition("python", "Python", ("*.py", "*.pyw"), ("ngettext:1,2", "pgettext:1c,2")),
    LanguageDefinition(
        "php",
        "PHP",
        ("*.php", "*.php3", "*.php4", "*.php5", "*.phtml"),
        ("__", "_e", "_n:1,2", "_x:1,2c", "esc_html__", "esc_attr__"),
    ),
    LanguageDefinition("perl", "Perl", ("*.pl", "*.PL", "*.pm", "*.perl"), ("__", "__x", "__n:1,2")),
    LanguageDefinition("lua", "Lua", ("*.lua",)),
    LanguageDefinition("shell", "Shell", ("*.sh", "*.bash")),
    LanguageDefinition("tcl", "Tcl", ("*.tcl",)),
    LanguageDefinition("glade", "Glade", ("*.glade", "*.ui")),
    LanguageDefinition("scheme", "Scheme", ("*.scm",)),
    LanguageDefinition("lisp", "Lisp", ("*.lisp", "*.lsp", "*.cl")),
)


class XgettextExtractor(Extractor):
    """Run xgettext for one language over the files it claims."""

    def __init__(
        self,
        definition: LanguageDefinition,
        tools: GettextTools | None = None,
        *,
        runner: ToolRunner = run_gettext,
    ) -> None:
        self.definition = definition
        self.tools = tools or GettextTools()
        self.runner = runner

    @property
    def id(self) -> str:
        return self.definition.id

    def supported_extensions(self) -> tuple[str, ...]:
        return self.definition.extensions

    def build_command(self, output: Path, file_list: Path, spec: SourceSpec) -> list[str]:
        command = [
            self.tools.xgettext,
            f"--language={self.definition.language}",
            f"--add-comments={TRANSLATOR_COMMENT_TAG}",
            "--force-po",
            "-o",
            str(output),
            f"--files-from={file_list}",
        ]
        if spec.charset:
            command.append(f"--from-code={spec.charset}")
        for keyword in (*self.definition.keywords, *spec.keywords):
            command.append(f"-k{keyword}")
        return command

    def extract(self, workspace: Workspace, spec: SourceSpec, files: Sequence[str]) -> Path | None:
        usable: list[str] = []
        for path in files:
            if "\n" in path or "\r" in path:
                LOGGER.warning("Skipping '%s': file names with line breaks cannot be passed to xgettext", path)
                continue
            usable.append(path)
        if not usable:
            return None

        # The list goes through a file to stay clear of command-line length limits; it is
        # written as raw bytes so names that are not valid UTF-8 reach xgettext unchanged.
        file_list = workspace.create_file_name("gettext_filelist.txt")
        file_list.write_bytes(b"".join(os.fsencode(path) + b"\n" for path in usable))
        output = workspace.create_file_name(f"{self.id}.pot")

        command = self.build_command(output, file_list, spec)
        if not self.runner(command, timeout=self.tools.timeout):
            LOGGER.error("Extraction with '%s' failed for %d files", self.id, len(usable))
            return None
        if not output.exists():
            LOGGER.debug("'%s' produced no output", self.id)
            return None
        return output


def create_language_extractors(
    tools: GettextTools | None = None,
    *,
    runner: ToolRunner = run_gettext,
) -> list[XgettextExtractor]:
    return [XgettextExtractor(definition, tools, runner=runner) for definition in LANGUAGES]


__all__ = [
    "LANGUAGES",
    "LanguageDefinition",
    "TRANSLATOR_COMMENT_TAG",
    "XgettextExtractor",
    "create_language_extractors",
]
