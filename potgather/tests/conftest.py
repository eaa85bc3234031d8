"""Shared fixtures: stub backends, a recording tool runner and scratch trees."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

import pytest

from potgather.extract.base import Extractor
from potgather.sources import SourceSpec
from potgather.workspace import TempDirectory


class StubExtractor(Extractor):
    """Backend claiming files by wildcard and writing a fake fragment."""

    def __init__(
        self,
        extractor_id: str,
        extensions: Iterable[str],
        *,
        produce: bool = True,
        error: Exception | None = None,
    ) -> None:
        self._id = extractor_id
        self.extensions = tuple(extensions)
        self.produce = produce
        self.error = error
        self.calls: list[list[str]] = []

    @property
    def id(self) -> str:
        return self._id

    def supported_extensions(self) -> tuple[str, ...]:
        return self.extensions

    def extract(self, workspace, spec: SourceSpec, files: Sequence[str]) -> Path | None:
        self.calls.append(list(files))
        if self.error is not None:
            raise self.error
        if not self.produce:
            return None
        fragment = workspace.create_file_name(f"{self.id}.pot")
        entries = "".join(f'#: {path}\nmsgid "{path}"\nmsgstr ""\n\n' for path in files)
        fragment.write_text(entries, encoding="utf-8")
        return fragment


class RecordingRunner:
    """Stand-in for run_gettext that records commands and fakes the output file."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.commands: list[list[str]] = []
        self.timeouts: list[float | None] = []

    def __call__(self, command: Sequence[str], *, timeout: float | None = None) -> bool:
        argv = [str(part) for part in command]
        self.commands.append(argv)
        self.timeouts.append(timeout)
        if not self.succeed:
            return False
        if "-o" in argv:
            Path(argv[argv.index("-o") + 1]).write_text('msgid ""\nmsgstr ""\n', encoding="utf-8")
        return True


@pytest.fixture()
def stub_extractor() -> Callable[..., StubExtractor]:
    return StubExtractor


@pytest.fixture()
def recording_runner() -> Callable[..., RecordingRunner]:
    return RecordingRunner


@pytest.fixture()
def workspace() -> Iterator[TempDirectory]:
    with TempDirectory() as directory:
        yield directory


@pytest.fixture()
def source_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Path]:
    """Create files under tmp_path and make it the working directory."""
    monkeypatch.chdir(tmp_path)

    def _build(*relative_paths: str, content: str = "") -> Path:
        for relative in relative_paths:
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _build
