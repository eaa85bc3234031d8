"""Tests for exclusion pattern matching."""

from __future__ import annotations

import logging
import sys

import pytest

from potgather import paths
from potgather.paths import ExclusionSet, PathPattern, has_wildcards, normalize_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("src/*.c", True), ("file?.py", True), ("[ab].txt", True), ("build", False), ("build/", False)],
)
def test_wildcard_detection(raw: str, expected: bool) -> None:
    assert has_wildcards(raw) is expected
    assert PathPattern.from_string(raw).is_wildcard is expected


def test_plain_pattern_matches_file_and_subtree() -> None:
    pattern = PathPattern.from_string("build")
    assert pattern.matches("build")
    assert pattern.matches("build/out/x.c")
    assert not pattern.matches("buildtools/x.c")
    assert not pattern.matches("src/build")


def test_trailing_slash_denotes_same_subtree() -> None:
    pattern = PathPattern.from_string("build/")
    assert pattern.pattern == "build"
    assert pattern.matches("build/deep/file.c")


def test_star_crosses_directory_separators() -> None:
    pattern = PathPattern.from_string("*.min.js")
    assert pattern.matches("static/vendor/jquery.min.js")
    assert not pattern.matches("static/app.js")


def test_question_mark_and_character_class() -> None:
    assert PathPattern.from_string("v?.c").matches("v1.c")
    assert not PathPattern.from_string("v?.c").matches("v10.c")
    assert PathPattern.from_string("[ab].c").matches("a.c")
    assert not PathPattern.from_string("[!ab].c").matches("a.c")


def test_backslashes_are_normalised() -> None:
    assert PathPattern.from_string("third_party\\lib").matches("third_party/lib/x.c")
    assert PathPattern.from_string("third_party").matches("third_party\\lib\\x.c")


@pytest.mark.skipif(sys.platform == "win32", reason="case-insensitive on Windows")
def test_matching_is_case_sensitive_on_posix() -> None:
    assert not PathPattern.from_string("*.C").matches("a.c")
    assert not PathPattern.from_string("Build").matches("build/a.c")


def test_malformed_wildcard_falls_back_to_literal(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(paths.fnmatch, "translate", lambda _pattern: "(")
    caplog.set_level(logging.WARNING, logger="potgather")
    pattern = PathPattern.from_string("gen[")
    assert pattern.is_wildcard is False
    assert pattern.matches("gen[")
    assert pattern.matches("gen[/x.c")
    assert not pattern.matches("gena")
    assert "matching it literally" in caplog.text


def test_exclusion_set_matches_any_pattern() -> None:
    exclusions = ExclusionSet.from_strings(["vendor", "*.generated.c", ""])
    assert len(exclusions) == 2
    assert exclusions.is_excluded("vendor/lib.c")
    assert exclusions.is_excluded("src/ui.generated.c")
    assert not exclusions.is_excluded("src/ui.c")


def test_empty_exclusion_set_excludes_nothing() -> None:
    exclusions = ExclusionSet.from_strings([])
    assert not exclusions
    assert not exclusions.is_excluded("anything")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("src/", "src"), ("./src", "src"), ("src//a.c", "src/a.c"), (".", "."), ("a\\b", "a/b"), ("", "")],
)
def test_normalize_path(raw: str, expected: str) -> None:
    assert normalize_path(raw) == expected


@pytest.mark.parametrize("raw", ["./build", "build/", "build//", "./build/"])
def test_plain_pattern_is_normalised_like_collected_paths(raw: str) -> None:
    pattern = PathPattern.from_string(raw)
    assert pattern.pattern == "build"
    assert pattern.matches("build/out/x.c")


def test_doubled_separator_in_pattern() -> None:
    pattern = PathPattern.from_string("src//gen")
    assert pattern.matches("src/gen")
    assert pattern.matches("src/gen/b.c")
    assert not pattern.matches("src/general.c")


def test_wildcard_with_leading_dot_segment() -> None:
    pattern = PathPattern.from_string("./src/*.c")
    assert pattern.is_wildcard
    assert pattern.matches("src/a.c")
    assert pattern.matches("./src/a.c")
    assert not pattern.matches("lib/a.c")


def test_display_path_replaces_undecodable_bytes() -> None:
    assert paths.display_path("src/main.py") == "src/main.py"
    assert paths.display_path("caf\udce9.py") == "caf\ufffd.py"
