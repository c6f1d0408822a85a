from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from result import Result, is_err

from nini.config import ConfigError, XmlConfigSource

FileArgument = Annotated[Path, typer.Argument(help="Path to the XML configuration file.")]
SectionArgument = Annotated[str, typer.Argument(help="Section name.")]


class OutputFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"


FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (yaml or json)."),
]

app = typer.Typer(help="Inspect and edit Nini XML configuration files.")


@app.callback(invoke_without_command=True)
def _config_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("show")
def show(file: FileArgument, format: FormatOption = OutputFormat.YAML) -> None:
    """Print every section and key."""
    source = _open(file)
    typer.echo(_format_payload(source.configs.to_dict(), format))


@app.command("get")
def get(
    file: FileArgument,
    section: SectionArgument,
    key: Annotated[str, typer.Argument(help="Key name.")],
) -> None:
    """Print a single value."""
    source = _open(file)
    config = source.configs.get(section)
    if config is None or key not in config:
        typer.secho(f"Key '{key}' not found in section '{section}'", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(config[key])


@app.command("set")
def set_(
    file: FileArgument,
    section: SectionArgument,
    key: Annotated[str, typer.Argument(help="Key name.")],
    value: Annotated[str, typer.Argument(help="New value.")],
    create: Annotated[bool, typer.Option("--create", help="Start a new file if FILE does not exist.")] = False,
) -> None:
    """Set a value, creating the section and key as needed, and save."""
    source = XmlConfigSource() if create and not file.exists() else _open(file)
    source.add_config(section)[key] = value
    _exit_on_error(source.save(file))


@app.command("unset")
def unset(
    file: FileArgument,
    section: SectionArgument,
    key: Annotated[str | None, typer.Argument(help="Key name; omit to remove the whole section.")] = None,
) -> None:
    """Remove a key, or a whole section, and save."""
    source = _open(file)
    config = source.configs.get(section)
    if config is None:
        typer.secho(f"Section '{section}' not found", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if key is None:
        source.configs.remove(section)
    elif key in config:
        del config[key]
    else:
        typer.secho(f"Key '{key}' not found in section '{section}'", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    _exit_on_error(source.save())


def _open(file: Path) -> XmlConfigSource:
    result = XmlConfigSource.from_path(file)
    _exit_on_error(result)
    return result.unwrap()


def _exit_on_error(result: Result[object, ConfigError]) -> None:
    if is_err(result):
        _handle_error(result.unwrap_err())
        raise typer.Exit(code=1)


def _format_payload(payload: dict[str, object], format: OutputFormat) -> str:
    if format is OutputFormat.JSON:
        return json.dumps(payload, indent=2)
    return yaml.safe_dump(payload, sort_keys=False)


def _handle_error(error: ConfigError) -> None:
    message = error.message
    expected_path = getattr(error, "expected_path", None)
    error_path = getattr(error, "path", None)
    if expected_path is not None:
        message = f"{message} (expected at {expected_path})"
    elif error_path is not None:
        message = f"{message} ({error_path})"

    typer.secho(message, err=True, fg=typer.colors.RED)
