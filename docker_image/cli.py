"""CLI entry point for docker-image."""

from __future__ import annotations

import json
import logging
import sys

import click

from docker_image.reference import DockerImage, InvalidFormatError, parse

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable verbose (DEBUG) logging.",
)
def main(verbose: bool) -> None:
    """docker-image — parse and render Docker image references."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command(name="parse")
@click.argument("reference")
@click.option(
    "--pretty/--no-pretty",
    default=True,
    help="Pretty-print the JSON output (default: on).",
)
def parse_command(reference: str, pretty: bool) -> None:
    """Parse REFERENCE and print its components as JSON.

    REFERENCE has the form [registry/]name[:tag][@digest], e.g.
    ghcr.io/nginx/nginx:latest. No defaults are filled in.
    """
    try:
        image = parse(reference)
    except InvalidFormatError as exc:
        raise click.ClickException(str(exc)) from exc

    indent = 2 if pretty else None
    click.echo(json.dumps(image.to_dict(), indent=indent))


@main.command(name="render")
@click.option("--registry", default=None, help="Registry host, e.g. docker.io.")
@click.option("--name", required=True, help="Image name, e.g. library/nginx.")
@click.option("--tag", default=None, help="Image tag, e.g. latest.")
@click.option("--digest", default=None, help="Content digest, e.g. sha256:<hex>.")
def render_command(
    registry: str | None,
    name: str,
    tag: str | None,
    digest: str | None,
) -> None:
    """Build a reference from its components and print it."""
    payload = {"registry": registry, "name": name, "tag": tag, "digest": digest}
    try:
        image = DockerImage.from_dict(payload)
    except InvalidFormatError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(image))


@main.command(name="check")
@click.argument("references", nargs=-1, required=True)
def check_command(references: tuple[str, ...]) -> None:
    """Check that every REFERENCE is valid. Exits 1 if any is not."""
    failed = 0
    for reference in references:
        try:
            parse(reference)
        except InvalidFormatError:
            failed += 1
            click.echo(f"invalid  {reference}")
        else:
            click.echo(f"ok       {reference}")

    logger.debug("Checked %d reference(s), %d invalid", len(references), failed)
    if failed:
        click.get_current_context().exit(1)


if __name__ == "__main__":
    main()
