from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from package_feed.core.dependencies import get_serializer, get_settings
from package_feed.storage.errors import PackageSerializationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Inspect and rewrite package cache files.")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Logging level (default from PACKAGE_FEED_LOG_LEVEL)"),
):
    """
    Package metadata cache tools.
    """
    try:
        settings = get_settings()
    except ValueError as exc:
        typer.echo(f"[ERROR] Invalid settings: {exc}", err=True)
        raise typer.Exit(code=2)
    configure_logging(log_level or settings.log_level)


@app.command()
def inspect(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
):
    """
    List the packages stored in a cache file, one 'Id Version' per line.
    """
    try:
        with path.open("rb") as stream:
            packages = get_serializer().deserialize(stream)
    except PackageSerializationError as exc:
        typer.echo(f"[ERROR] {path}: {exc}", err=True)
        raise typer.Exit(code=1)

    for package in packages:
        typer.echo(f"{package.id} {package.version}")
    typer.echo(f"[OK] {len(packages)} packages")


@app.command()
def normalize(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    destination: Path = typer.Argument(...),
):
    """
    Decode a cache file and write it back out with the configured indentation.
    """
    serializer = get_serializer()
    try:
        packages = serializer.decode(source.read_bytes())
        data = serializer.encode(packages)
    except PackageSerializationError as exc:
        typer.echo(f"[ERROR] {source}: {exc}", err=True)
        raise typer.Exit(code=1)

    destination.write_bytes(data)
    logger.info("Rewrote %d packages from %s to %s", len(packages), source, destination)
    typer.echo(f"[OK] {len(packages)} packages written to {destination}")


if __name__ == "__main__":
    app()
