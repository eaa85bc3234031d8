"""Tests for the scratch workspace."""

from __future__ import annotations

from potgather.workspace import TempDirectory


def test_names_never_collide() -> None:
    with TempDirectory() as workspace:
        names = [workspace.create_file_name("extracted.pot") for _ in range(5)]
        assert len(set(names)) == 5
        assert all(name.parent == workspace.path for name in names)
        assert all(name.name.endswith("extracted.pot") for name in names)


def test_suggested_name_cannot_escape_directory() -> None:
    with TempDirectory() as workspace:
        assert workspace.create_file_name("../../etc/passwd").parent == workspace.path


def test_cleanup_removes_directory() -> None:
    with TempDirectory() as workspace:
        workspace.create_file_name("x.pot").write_text("", encoding="utf-8")
        path = workspace.path
    assert not path.exists()


def test_keep_preserves_directory() -> None:
    workspace = TempDirectory(keep=True)
    with workspace:
        pass
    try:
        assert workspace.path.exists()
    finally:
        workspace.keep = False
        workspace.cleanup()
    assert not workspace.path.exists()
