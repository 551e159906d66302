# src/fetchcell/cli.py
"""fetchcell Command Line Interface.

Entry point for the fetchcell CLI tool.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Literal

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from fetchcell import __version__
from fetchcell.cli_formatters import create_console_formatters, create_json_formatters, subscribe_formatters
from fetchcell.contracts import CellEvaluationResult
from fetchcell.core.config import FetchCellSettings, load_settings
from fetchcell.core.parser import parse_fetch_cell

__all__ = [
    "app",
]

app = typer.Typer(
    name="fetchcell",
    help="fetchcell: evaluate notebook fetch cells.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fetchcell version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Raises:
        typer.Exit: If an explicit env_file path doesn't exist
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(f"Error: .env file not found: {env_file}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)
    return load_dotenv(override=False)


def _load_settings_or_exit(settings: Path | None) -> FetchCellSettings:
    if settings is None:
        return FetchCellSettings()
    settings_path = settings.expanduser()
    try:
        return load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _read_cell_or_exit(cell_file: Path) -> str:
    try:
        return cell_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        typer.echo(f"Error: Cell file not found: {cell_file}", err=True)
        raise typer.Exit(1) from None
    except UnicodeDecodeError:
        typer.echo(f"Error: Cell file is not valid UTF-8: {cell_file}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: Cannot read cell file {cell_file}: {e.strerror or e}", err=True)
        raise typer.Exit(1) from None


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs.",
    ),
) -> None:
    """fetchcell: evaluate notebook fetch cells."""
    from fetchcell.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING", stream=sys.stderr)
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command()
def run(
    ctx: typer.Context,
    cell_file: Path = typer.Argument(..., help="File containing the fetch cell text."),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    eval_id: str | None = typer.Option(
        None,
        "--eval-id",
        help="Evaluation id reported with the status (generated when omitted).",
    ),
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (structured JSON).",
    ),
) -> None:
    """Evaluate a fetch cell. Exits 1 when the cell's status is ERROR."""
    from fetchcell.core.logging import configure_logging
    from fetchcell.session import FetchCellSession

    config = _load_settings_or_exit(settings)
    cell_text = _read_cell_or_exit(cell_file)

    flags = ctx.obj or {}
    if settings is not None and not flags.get("verbose"):
        configure_logging(
            json_output=config.logging.json_output or bool(flags.get("json_logs")),
            level=config.logging.level,
            stream=sys.stderr,
        )

    async def _evaluate() -> CellEvaluationResult:
        async with FetchCellSession(config) as session:
            formatters = create_json_formatters() if output_format == "json" else create_console_formatters()
            subscribe_formatters(session.event_bus, formatters)
            return await session.evaluate(cell_text, eval_id)

    result = asyncio.run(_evaluate())

    if output_format == "json":
        typer.echo(json.dumps({"event": "status", "status": str(result.status), "evalId": result.eval_id}))
    elif result.succeeded:
        typer.secho(f"SUCCESS: {len(result.entries)} directive(s) applied", fg=typer.colors.GREEN)
    else:
        typer.secho(f"ERROR: {result.failed_count} of {len(result.entries)} directive(s) failed", fg=typer.colors.RED)

    if not result.succeeded:
        raise typer.Exit(1)


@app.command()
def parse(
    cell_file: Path = typer.Argument(..., help="File containing the fetch cell text."),
) -> None:
    """Parse a fetch cell and print its directives as JSON. Exits 1 on syntax errors."""
    directives = parse_fetch_cell(_read_cell_or_exit(cell_file))
    for directive in directives:
        typer.echo(json.dumps(directive.to_wire()))
    if any(directive.syntax_error is not None for directive in directives):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
