"""
Command-line entry point for the Lua validator.

Validates Lua/Luau files (or every .lua/.luau file under a directory) and
prints one line per issue.

Example:
    $ luavalidator src/ --filter errors
    $ python -m luavalidator.main main.lua --format json

Exit codes:
    0: every file is valid (warnings allowed)
    1: at least one file has errors
    2: usage, configuration or file access problems
"""

from pathlib import Path
from typing import Annotated, List, Optional

import typer

from luavalidator.core.config import ValidatorConfig
from luavalidator.core.profile_manager import ProfileManager
from luavalidator.core.report import VALID_FILTERS, format_json_report, format_report
from luavalidator.core.validator import LuaValidator
from luavalidator.utils.logger import VALID_LOG_LEVELS, setup_logger
from luavalidator.utils.path_utils import collect_lua_files

APP_NAME = "luavalidator"
APP_VERSION = "0.1.0"

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2

OUTPUT_FORMATS = ("text", "json")

app = typer.Typer(
    name=APP_NAME,
    help="Check Roblox Lua scripts for syntax errors, deprecated APIs and common mistakes.",
    no_args_is_help=True,
)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(EXIT_USAGE)


def _load_config(config_file: Path | None, profile: str | None) -> ValidatorConfig:
    if config_file is not None and profile is not None:
        raise _fail("Use either --config or --profile, not both")
    try:
        if config_file is not None:
            return ProfileManager.load_profile(config_file)
        if profile is not None:
            return ProfileManager.get_default_profile(profile)
    except (OSError, ValueError) as e:
        raise _fail(str(e))
    return ValidatorConfig()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} version {APP_VERSION}")
        raise typer.Exit()


@app.command()
def main(
    paths: Annotated[
        List[Path],
        typer.Argument(help="Lua files or directories to validate"),
    ],
    filter_name: Annotated[
        str,
        typer.Option("--filter", "-f", help="Issues to show: all, errors or warnings"),
    ] = "all",
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: 'text' or 'json'"),
    ] = "text",
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="JSON profile with rule switches"),
    ] = None,
    profile: Annotated[
        Optional[str],
        typer.Option("--profile", "-p", help="Built-in profile name (default, syntax-only, client, no-style)"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level for diagnostics output"),
    ] = "WARNING",
    log_file: Annotated[
        Optional[Path],
        typer.Option("--log-file", help="Also write detailed logs to this file"),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Validate Lua sources and report their issues."""
    if filter_name not in VALID_FILTERS:
        raise _fail(f"Invalid filter: {filter_name}. Must be one of {VALID_FILTERS}")
    if output_format not in OUTPUT_FORMATS:
        raise _fail(f"Invalid format: {output_format}. Must be one of {OUTPUT_FORMATS}")
    if log_level.upper() not in VALID_LOG_LEVELS:
        raise _fail(f"Invalid log level: {log_level}. Must be one of {VALID_LOG_LEVELS}")

    logger = setup_logger(APP_NAME, level=log_level, log_file=log_file)
    config = _load_config(config_file, profile)

    files: list[Path] = []
    try:
        for path in paths:
            files.extend(collect_lua_files(path))
    except FileNotFoundError as e:
        raise _fail(str(e))

    if not files:
        raise _fail("No Lua files found")

    logger.info(f"Validating {len(files)} file(s) with profile '{config.name}'")
    reports = LuaValidator(config=config).validate_files(files)

    if output_format == "json":
        typer.echo(format_json_report(reports, filter_name))
    else:
        typer.echo(format_report(reports, filter_name))

    if any(not report.success for report in reports):
        raise typer.Exit(EXIT_USAGE)
    if any(not report.is_valid for report in reports):
        raise typer.Exit(EXIT_INVALID)
    raise typer.Exit(EXIT_OK)


if __name__ == "__main__":
    app()
