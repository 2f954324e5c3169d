"""Command line entry point: render Markdown to Word or Google Docs, or run the MCP server."""

import logging
import sys

import click
from googleapiclient.errors import HttpError

from core.config import get_config
from core.container import get_container
from core.errors import MarkdownRenderError, format_error
from gdocs.writing import render_markdown_to_doc
from mdrender import render_markdown
from word import DocxHost

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@click.group()
def cli():
    """Render Markdown into native rich-text documents.

    Word files are written locally; Google Docs are updated through the Docs API.
    """
    try:
        _configure_logging()
    except MarkdownRenderError as e:
        raise click.ClickException(format_error("configuration", e)) from e


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.argument("output", type=click.Path(dir_okay=False))
def render(source, output):
    """Render SOURCE (Markdown, '-' for stdin) into the Word file OUTPUT."""
    markdown = source.read()
    host = DocxHost(path=output)
    try:
        render_markdown(markdown, host, theme=get_config().theme())
    except MarkdownRenderError as e:
        raise click.ClickException(format_error("render", e)) from e
    click.echo(f"Wrote {output}")


@cli.command()
@click.argument("document_id")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--index", "-i", default=1, show_default=True, type=click.IntRange(min=1), help="Body index to insert at")
def insert(document_id, source, index):
    """Render SOURCE (Markdown, '-' for stdin) into the Google Doc DOCUMENT_ID."""
    markdown = source.read()
    try:
        service = get_container().docs_service
        count = render_markdown_to_doc(service, document_id, markdown, index)
    except (MarkdownRenderError, HttpError) as e:
        raise click.ClickException(format_error("insert", e)) from e
    click.echo(f"Applied {count} requests to document {document_id}")


@cli.command()
@click.option("--transport", "-t", type=click.Choice(["stdio", "streamable-http"]), help="Override MDRENDER_MCP_TRANSPORT")
@click.option("--port", "-p", type=int, help="Override MDRENDER_MCP_PORT")
def serve(transport, port):
    """Run the MCP server exposing insert_markdown and create_doc."""
    from core.server import run_server

    config = get_config()
    run_server(transport or config.transport, port or config.port)


if __name__ == "__main__":
    cli()
