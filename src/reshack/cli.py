"""Command-line interface for reshack."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import typer

from .config import Settings, get_settings
from .errors import ConfigurationError, UnknownOperationError
from .logging_utils import configure_logging
from .tools import OperationContext, OperationRegistry

app = typer.Typer(
    name="reshack",
    help="Resource Hacker operations over MCP and the command line.",
    add_completion=False,
)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ConfigurationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(2) from exc


def _build_registry(settings: Settings, cwd: Path | None = None) -> OperationRegistry:
    return OperationRegistry(OperationContext.from_settings(settings, cwd=cwd))


def parse_call_arguments(tokens: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` and ``--key value`` tokens into call arguments."""
    arguments: dict[str, Any] = {}
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.startswith("--"):
            key = token[2:]
            if "=" in key:
                name, value = key.split("=", 1)
                arguments[name] = value
                index += 1
                continue
            if index + 1 < len(tokens) and not tokens[index + 1].startswith("--"):
                arguments[key] = tokens[index + 1]
                index += 2
                continue
            raise typer.BadParameter(f"missing value for --{key}")
        if "=" in token:
            key, value = token.split("=", 1)
            arguments[key] = value
            index += 1
            continue
        raise typer.BadParameter(f"expected key=value, got {token!r}")
    return arguments


def _serve(log_level: str | None) -> None:
    from .server import serve

    settings = _load_settings()
    configure_logging(log_level or settings.log_level)
    try:
        asyncio.run(serve(_build_registry(settings)))
    except KeyboardInterrupt:
        raise typer.Exit(0) from None


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _serve(None)


@app.command()
def serve(
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Override the configured log level"),
) -> None:
    """Run the MCP server on stdio."""
    _serve(log_level)


@app.command("tools")
def list_tools() -> None:
    """Show available operations."""
    settings = _load_settings()
    typer.echo(_build_registry(settings).catalog.render())


@app.command()
def describe(name: str = typer.Argument(..., help="Operation name")) -> None:
    """Show one operation and its parameter schema."""
    settings = _load_settings()
    try:
        typer.echo(_build_registry(settings).detail(name))
    except UnknownOperationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def call(
    name: str = typer.Argument(..., help="Operation name, e.g. list_resources"),
    params: list[str] | None = typer.Argument(None, help="Parameters as key=value"),  # noqa: B008
    cwd: Path | None = typer.Option(None, "--cwd", help="Directory relative paths resolve against"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Run one operation and print its result."""
    settings = _load_settings()
    configure_logging(settings.log_level, profile="console")
    arguments = parse_call_arguments(params or [])
    result = asyncio.run(_build_registry(settings, cwd).execute(name, arguments))
    if as_json:
        typer.echo(json.dumps({"text": result.text, "is_error": result.is_error}, ensure_ascii=False, indent=2))
    else:
        typer.echo(result.text, err=result.is_error)
    if result.is_error:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
