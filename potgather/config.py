"""Configuration models for potgather."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .gettext_tools import GettextTools
from .sources import CURRENT_DIRECTORY, SourceSpec

CONFIG_FILENAME = "potgather.yaml"


class ConfigError(ValueError):
    """Raised when potgather.yaml cannot be read."""


class ToolsConfig(BaseModel):
    xgettext: str = "xgettext"
    msgcat: str = "msgcat"
    timeout: Optional[float] = Field(default=None, gt=0)

    def to_gettext_tools(self) -> GettextTools:
        return GettextTools(xgettext=self.xgettext, msgcat=self.msgcat, timeout=self.timeout)


class PotGatherConfig(BaseModel):
    base_path: str = CURRENT_DIRECTORY
    search_paths: List[str] = Field(default_factory=lambda: [CURRENT_DIRECTORY])
    exclude: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    charset: Optional[str] = "UTF-8"
    extractors: List[str] = Field(default_factory=list)
    output: str = "messages.pot"
    report: Optional[str] = None
    keep_temp: bool = False
    log_level: str = "INFO"
    tools: ToolsConfig = Field(default_factory=ToolsConfig)

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level '{value}'")
        return level

    def to_source_spec(self) -> SourceSpec:
        return SourceSpec(
            search_paths=tuple(self.search_paths),
            excluded_paths=tuple(self.exclude),
            base_path=self.base_path,
            keywords=tuple(self.keywords),
            charset=self.charset or None,
        )


def load_config_file(root: Path) -> dict[str, object]:
    """Return the raw mapping stored in potgather.yaml, or an empty dict."""
    config_path = root / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse {config_path}: {error}") from error
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping")
    return data


__all__ = ["CONFIG_FILENAME", "ConfigError", "PotGatherConfig", "ToolsConfig", "load_config_file"]
