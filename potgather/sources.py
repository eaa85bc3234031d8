"""Description of the sources an extraction run operates on."""

from __future__ import annotations

from dataclasses import dataclass, field

from .paths import ExclusionSet

CURRENT_DIRECTORY = "."


class UnsupportedBasePathError(ValueError):
    """Raised when a source spec uses a base path other than the working directory."""


@dataclass(frozen=True, slots=True)
class SourceSpec:
    """Search paths, exclusions and extraction parameters for one run."""

    search_paths: tuple[str, ...] = (CURRENT_DIRECTORY,)
    excluded_paths: tuple[str, ...] = ()
    base_path: str = CURRENT_DIRECTORY
    keywords: tuple[str, ...] = ()
    charset: str | None = "UTF-8"
    exclusions: ExclusionSet = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("search_paths", "excluded_paths", "keywords"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "exclusions", ExclusionSet.from_strings(self.excluded_paths))

    def ensure_supported(self) -> None:
        """Reject base paths that are not the current working directory."""
        if self.base_path != CURRENT_DIRECTORY:
            raise UnsupportedBasePathError(
                f"Base path '{self.base_path}' is not supported; run from the source root with base path '.'"
            )


__all__ = ["CURRENT_DIRECTORY", "SourceSpec", "UnsupportedBasePathError"]
