#!/usr/bin/env python3
"""reqtime CLI.

Time a single HTTP request and show where the time went.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from reqtime import __version__
from reqtime.color import Color
from reqtime.headers import Header
from reqtime.models import Method, RequestConfig
from reqtime.network import send_request
from reqtime.output import Screen, print_error, write_body

logger = logging.getLogger(__name__)
console = Console()
err_console = Console(stderr=True)


app = typer.Typer(
    name="reqtime",
    help="Time an HTTP request phase by phase",
    add_completion=False,
)


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"reqtime version {__version__}")
        raise typer.Exit()


def _read_data(data: str | None) -> bytes | None:
    """Resolve ``-d`` input; ``@path`` reads the request body from a file."""
    if data is None:
        return None
    if data.startswith("@"):
        path = Path(data[1:])
        try:
            return path.read_bytes()
        except OSError as exc:
            raise typer.BadParameter(f"Cannot read {path}: {exc}", param_hint="--data") from exc
    return data.encode("utf-8")


def build_config(
    url: str,
    method: str,
    headers: list[str] | None,
    data: str | None,
    output: Path | None,
    follow_redirects: bool,
    verbose: bool,
    display_response_body: bool,
    display_response_headers: bool,
    color: str,
) -> RequestConfig:
    """Validate raw option values into a request configuration."""
    try:
        parsed_method = Method.parse(method)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--method") from exc
    try:
        parsed_color = Color.parse(color)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--color") from exc
    try:
        parsed_headers = tuple(Header.parse(h) for h in headers or [])
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--headers") from exc

    return RequestConfig(
        url=url,
        method=parsed_method,
        color=parsed_color,
        request_headers=parsed_headers,
        request_body=_read_data(data),
        output=output,
        display_response_body=display_response_body,
        display_response_headers=display_response_headers,
        follow_redirects=follow_redirects,
        verbose=verbose,
    )


@app.command()
def run(
    url: str = typer.Argument(..., help="URL to request"),
    method: str = typer.Option(
        "GET",
        "--method",
        "-X",
        help="Available methods: GET, HEAD, POST, PUT, DELETE, CONNECT, OPTIONS, TRACE, PATCH",
    ),
    headers: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--headers",
        "-H",
        help="Pass custom header(s) to server, example: -H 'Accept: application/json'",
    ),
    data: str | None = typer.Option(
        None,
        "--data",
        "-d",
        help="HTTP request data to send, example: -d 'key=value' -d @file.json",
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Write response body to <file>"
    ),
    follow_redirects: bool = typer.Option(
        False, "--location", "-l", help="Follow HTTP 3xx redirects"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    display_response_body: bool = typer.Option(
        False, "--display-response-body", "-B", help="Display response body"
    ),
    display_response_headers: bool = typer.Option(
        False, "--display-response-headers", "-G", help="Display response headers"
    ),
    color: str = typer.Option(
        "cyan",
        "--color",
        help="Main output color: black, red, green, yellow, blue, magenta, cyan, white",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """Send one request and print its phase timings."""
    setup_logging(verbose)

    config = build_config(
        url,
        method,
        headers,
        data,
        output,
        follow_redirects,
        verbose,
        display_response_body,
        display_response_headers,
        color,
    )

    try:
        report = send_request(config)
        written = write_body(config, report)
        if written is not None:
            logger.info(f"Response body written to: {written}")
        Screen(config, report, console=console).display()

    except KeyboardInterrupt:
        typer.echo("\n\nInterrupted by user", err=True)
        raise typer.Exit(130) from None
    except Exception as e:
        logger.debug("Request failed", exc_info=True)
        print_error(err_console, f"Error: {e}")
        raise typer.Exit(1) from e


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
