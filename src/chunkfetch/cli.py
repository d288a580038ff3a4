"""CLI interface using typer."""

import asyncio
import base64
import json
import sys
from typing import TextIO

import typer

from .config import FetcherSettings, settings
from .errors import FetchError, RequestError
from .handler import create_engine, handle_event, read_all
from .logging import configure_logging, get_logger
from .request import FetchRequest

app = typer.Typer(
    name="chunkfetch",
    help="Fetch HTTP bodies and page them out as base64 chunks",
    no_args_is_help=True,
)

logger = get_logger(__name__)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level"),
    log_json: bool = typer.Option(settings.log_json, "--log-json/--log-console", help="Log format"),
):
    """Configure logging for every command."""
    configure_logging(level=log_level, output=sys.stderr, json_format=log_json)


async def _invoke(payload, config: FetcherSettings) -> dict:
    engine = create_engine(config)
    try:
        return await handle_event(engine, payload)
    finally:
        await engine.fetcher.close()


async def _serve(lines: TextIO, config: FetcherSettings) -> int:
    """Answer one JSON payload per line with one JSON reply per line.

    A single engine serves the whole stream, so continuation calls are
    answered from the cache filled by earlier ones. A failed invocation
    yields an ``{"error": ...}`` line and the stream carries on.
    """
    engine = create_engine(config)
    served = 0
    try:
        for line in lines:
            if not line.strip():
                continue
            try:
                reply = await handle_event(engine, json.loads(line))
            except json.JSONDecodeError as e:
                reply = {"error": f"Invalid JSON payload: {e}"}
            except RequestError as e:
                reply = {"error": f"Bad request: {e}"}
            except FetchError as e:
                reply = {"error": f"Fetch failed: {e}"}
            if "error" in reply:
                logger.warning("invocation_failed", error=reply["error"])
            typer.echo(json.dumps(reply))
            served += 1
    finally:
        await engine.fetcher.close()
    return served


async def _fetch_all(request: FetchRequest, config: FetcherSettings) -> tuple[bytes, int]:
    engine = create_engine(config)
    try:
        text, pages = await read_all(engine, request)
    finally:
        await engine.fetcher.close()
    return base64.b64decode(text), pages


def _parse_header_options(values: list[str]) -> dict[str, str]:
    headers = {}
    for value in values:
        name, sep, val = value.partition(":")
        if not sep:
            raise RequestError(f"Header must look like 'Name: value', got {value!r}")
        headers[name.strip()] = val.strip()
    return headers


@app.command()
def invoke(
    payload_file: typer.FileText = typer.Argument(
        "-", help="JSON payload file ('-' for stdin)"
    ),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate and hostname checks"),
):
    """Run one invocation and print the reply as JSON."""
    try:
        payload = json.load(payload_file)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON payload: {e}", err=True)
        raise typer.Exit(2)

    config = settings.model_copy(update={"verify_tls": False}) if insecure else settings
    try:
        reply = asyncio.run(_invoke(payload, config))
    except RequestError as e:
        typer.echo(f"Bad request: {e}", err=True)
        raise typer.Exit(2)
    except FetchError as e:
        typer.echo(f"Fetch failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(reply))


@app.command()
def serve(
    input_file: typer.FileText = typer.Argument(
        "-", help="JSON-lines payload stream ('-' for stdin)"
    ),
    page_size: int = typer.Option(
        settings.page_size, "--page-size", min=1, help="Encoded characters per page"
    ),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate and hostname checks"),
):
    """Serve invocations one JSON payload per line, sharing one cache."""
    update: dict = {"page_size": page_size}
    if insecure:
        update["verify_tls"] = False
    served = asyncio.run(_serve(input_file, settings.model_copy(update=update)))
    logger.info("serve_finished", served=served)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch"),
    method: str = typer.Option("GET", "-X", "--method", help="HTTP method"),
    header: list[str] = typer.Option([], "-H", "--header", help="Request header 'Name: value'"),
    output: str = typer.Option(None, "-o", "--output", help="Output file for the decoded body"),
    page_size: int = typer.Option(
        settings.page_size, "--page-size", min=1, help="Encoded characters per page"
    ),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate and hostname checks"),
):
    """Page through a URL's whole body and write the decoded bytes."""
    update: dict = {"page_size": page_size}
    if insecure:
        update["verify_tls"] = False
    config = settings.model_copy(update=update)

    try:
        request = FetchRequest.from_payload(
            {"method": method, "uri": url, "headers": _parse_header_options(header)}
        )
        content, pages = asyncio.run(_fetch_all(request, config))
    except RequestError as e:
        typer.echo(f"Bad request: {e}", err=True)
        raise typer.Exit(2)
    except FetchError as e:
        typer.echo(f"Fetch failed: {e}", err=True)
        raise typer.Exit(1)

    if output:
        with open(output, "wb") as f:
            f.write(content)
        typer.echo(f"Saved {len(content)} bytes in {pages} page(s) to {output}", err=True)
    else:
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
        typer.echo(f"Received {len(content)} bytes in {pages} page(s)", err=True)


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"chunkfetch {__version__}")


if __name__ == "__main__":
    app()
