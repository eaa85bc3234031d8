"""Command-line interface for potgather."""

from __future__ import annotations

import contextlib
import shutil
from pathlib import Path
from typing import List, Optional

import orjson
import typer
from pydantic import ValidationError

from . import __version__
from .collect import collect_all_files
from .config import ConfigError, PotGatherConfig, load_config_file
from .extract.coordinator import ExtractionCoordinator, ExtractionReport
from .extract.registry import ExtractorRegistry, create_all_extractors
from .gettext_tools import run_gettext
from .logging import configure_logging, get_logger
from .merge import TemplateMerger
from .paths import display_path
from .sources import UnsupportedBasePathError
from .workspace import TempDirectory

app = typer.Typer(help="Extract translatable strings from source trees into a gettext template.")
LOGGER = get_logger(__name__)


@app.callback()
def main() -> None:
    """potgather CLI root."""
    return None


def _merge_config(root: Path, cli_options: dict[str, object], tool_options: dict[str, object]) -> PotGatherConfig:
    try:
        file_overrides = load_config_file(root)
    except ConfigError as error:
        raise typer.BadParameter(str(error)) from error
    merged: dict[str, object] = {**file_overrides}
    merged.update({key: value for key, value in cli_options.items() if value is not None})
    tools = merged.get("tools") or {}
    if not isinstance(tools, dict):
        raise typer.BadParameter("'tools' in potgather.yaml must be a mapping")
    tools = {**tools, **{key: value for key, value in tool_options.items() if value is not None}}
    merged["tools"] = tools
    try:
        return PotGatherConfig(**merged)
    except ValidationError as error:
        raise typer.BadParameter(f"Invalid configuration: {error}") from error


def _resolve_against(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else (root / path).resolve()


def _build_registry(config: PotGatherConfig) -> ExtractorRegistry:
    registry = create_all_extractors(config.tools.to_gettext_tools(), runner=run_gettext)
    if not config.extractors:
        return registry
    try:
        return registry.select(config.extractors)
    except KeyError as error:
        raise typer.BadParameter(f"Unknown extractor(s): {error.args[0]}") from error


def _write_report(path: Path, report: ExtractionReport, files: list[str]) -> None:
    payload: dict[str, object] = {
        "potgather_version": __version__,
        "collected": len(files),
        **report.to_dict(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n")


@app.command("extract")
def extract(
    paths: Optional[List[str]] = typer.Argument(None, help="Files or directories to scan, relative to --root."),
    root: Path = typer.Option(Path("."), exists=True, file_okay=False, dir_okay=True, help="Source root directory."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Path or wildcard to exclude."),
    keyword: Optional[List[str]] = typer.Option(None, "--keyword", "-k", help="Additional xgettext keyword."),
    charset: Optional[str] = typer.Option(None, help="Source file encoding."),
    extractor: Optional[List[str]] = typer.Option(None, "--extractor", "-e", help="Only use these extractors."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write the template."),
    report: Optional[Path] = typer.Option(None, help="Write a JSON summary of the run."),
    keep_temp: Optional[bool] = typer.Option(None, "--keep-temp/--no-keep-temp", help="Keep intermediate files."),
    xgettext: Optional[str] = typer.Option(None, help="xgettext executable."),
    msgcat: Optional[str] = typer.Option(None, help="msgcat executable."),
    timeout: Optional[float] = typer.Option(None, min=0.001, help="Per-tool timeout in seconds."),
    log_level: Optional[str] = typer.Option(None, help="Log level."),
) -> None:
    root_path = root.resolve()
    cli_options: dict[str, object] = {
        "search_paths": paths or None,
        "exclude": exclude or None,
        "keywords": keyword or None,
        "charset": charset,
        "extractors": extractor or None,
        "output": str(output.resolve()) if output else None,
        "report": str(report.resolve()) if report else None,
        "keep_temp": keep_temp,
        "log_level": log_level,
    }
    config = _merge_config(root_path, cli_options, {"xgettext": xgettext, "msgcat": msgcat, "timeout": timeout})
    configure_logging(config.log_level)

    output_path = _resolve_against(root_path, config.output)
    report_path = _resolve_against(root_path, config.report) if config.report else None
    registry = _build_registry(config)
    tools = config.tools.to_gettext_tools()

    with contextlib.chdir(root_path):
        spec = config.to_source_spec()
        try:
            files = collect_all_files(spec)
        except UnsupportedBasePathError as error:
            LOGGER.error("%s", error)
            raise typer.Exit(code=1) from error
        if not files:
            LOGGER.warning("No source files found.")
            if report_path is not None:
                _write_report(report_path, ExtractionReport(), files)
            return

        with TempDirectory(keep=config.keep_temp) as workspace:
            merger = TemplateMerger(workspace, tools, runner=run_gettext)
            coordinator = ExtractionCoordinator(registry, workspace, spec, merger)
            result = coordinator.run(files)

            if result.unmatched:
                LOGGER.warning("%d files were not recognized by any extractor", len(result.unmatched))
            if report_path is not None:
                _write_report(report_path, result, files)
            if result.failed:
                raise typer.Exit(code=1)
            if result.template is None:
                LOGGER.warning("No translatable strings found.")
                return

            output_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(result.template, output_path)

    LOGGER.info("Template written to %s", output_path)


@app.command("collect")
def collect(
    paths: Optional[List[str]] = typer.Argument(None, help="Files or directories to scan, relative to --root."),
    root: Path = typer.Option(Path("."), exists=True, file_okay=False, dir_okay=True, help="Source root directory."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Path or wildcard to exclude."),
    log_level: Optional[str] = typer.Option(None, help="Log level."),
) -> None:
    """Print the files an extraction would scan."""
    root_path = root.resolve()
    config = _merge_config(
        root_path,
        {"search_paths": paths or None, "exclude": exclude or None, "log_level": log_level},
        {},
    )
    configure_logging(config.log_level)
    with contextlib.chdir(root_path):
        try:
            files = collect_all_files(config.to_source_spec())
        except UnsupportedBasePathError as error:
            LOGGER.error("%s", error)
            raise typer.Exit(code=1) from error
    for path in files:
        typer.echo(display_path(path))


@app.command("extractors")
def extractors() -> None:
    """List the available extractors in priority order."""
    for backend in create_all_extractors():
        typer.echo(f"{backend.id}\t{' '.join(backend.supported_extensions())}")
