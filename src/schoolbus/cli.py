"""CLI entry point for the school bus service."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import uvicorn

from schoolbus.config import ConfigError, ServiceConfig, resolve_config
from schoolbus.logging import setup_logging


def _load(config_path: Path | None) -> ServiceConfig:
    try:
        return resolve_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="schoolbus")
def main() -> None:
    """School bus student records service."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to schoolbus.yaml (auto-detected if not specified)",
)
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Bind port (overrides config)")
@click.option("--db", "db_path", default=None, help="SQLite database path (overrides config)")
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    db_path: str | None,
) -> None:
    """Run the HTTP API server."""
    from schoolbus.api.app import create_app  # noqa: PLC0415

    config = _load(config_path)
    if host is not None:
        config.host = host
    if port is not None:
        config.port = port
    if db_path is not None:
        config.db_path = db_path

    setup_logging(config.logging, capture_server_logs=True)
    click.echo(f"Serving on http://{config.host}:{config.port} (db: {config.db_path})")
    uvicorn.run(
        create_app(config.db_path),
        host=config.host,
        port=config.port,
        log_config=None,
    )


@main.command("init-db")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to schoolbus.yaml (auto-detected if not specified)",
)
@click.option("--db", "db_path", default=None, help="SQLite database path (overrides config)")
def init_db(config_path: Path | None, db_path: str | None) -> None:
    """Create the students table if it doesn't exist."""
    from schoolbus.students.database import Database  # noqa: PLC0415

    config = _load(config_path)
    database = Database(db_path or config.db_path)
    try:
        database.create_tables()
    finally:
        database.close()
    click.echo(f"Database ready: {database.db_path}")


if __name__ == "__main__":
    main()
