from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional
import typer

from .bootstrap import build_app
from .config_loader import ConfigError
from .core.errors import ResasError
from .downloader import download
from .storage.parquet_writer import EmptyDatasetError
from .utils.logging_setup import setup_logging

app = typer.Typer(add_completion=False)


@app.command()
def main(
    token: str = typer.Argument(..., help="RESAS API key"),
    output_path: Path = typer.Argument(..., help="Parquet file to write"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML config"),
    log_level: str = typer.Option("WARNING", "--log-level"),
):
    """Download every prefecture's cities from RESAS into a Parquet file."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        print(f"Unknown log level '{log_level}'", file=sys.stderr)
        raise typer.Exit(code=2)
    setup_logging(level)

    try:
        ctx = build_app(token, config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"[config] {e}", file=sys.stderr)
        raise typer.Exit(code=1)

    client = ctx["client"]
    try:
        with client:
            download(client, output_path, interval_millis=ctx["interval_millis"])
    except ResasError as e:
        print(f"Failed to get request: {e}", file=sys.stderr)
        raise typer.Exit(code=1)
    except EmptyDatasetError as e:
        print(str(e), file=sys.stderr)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
