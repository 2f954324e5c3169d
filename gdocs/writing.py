"""
Google Docs Writing Tools

MCP tools that render Markdown into Google Docs through `GoogleDocsHost`.
"""

import asyncio
import logging
from typing import Annotated, Any

from pydantic import Field

from core.config import get_config
from core.container import get_container
from core.server import server
from core.utils import handle_http_errors, validate_document_id, validate_positive_int
from gdocs.docs_host import GoogleDocsHost
from mdrender import render_markdown

logger = logging.getLogger(__name__)

DOC_LINK_TEMPLATE = "https://docs.google.com/document/d/{document_id}/edit"


def render_markdown_to_doc(service: Any, document_id: str, markdown: str, index: int = 1) -> int:
    """
    Render `markdown` into a document at `index` and commit in one batchUpdate.

    Blocking; call through `asyncio.to_thread` from async code.

    Returns:
        Number of requests submitted.
    """
    host = GoogleDocsHost(service, document_id, start_index=index)
    render_markdown(markdown, host, theme=get_config().theme())
    return len(host.requests)


@server.tool()
@handle_http_errors("insert_markdown")
async def insert_markdown(
    document_id: Annotated[str, Field(description="ID of the Google Doc to write into.")],
    markdown: Annotated[str, Field(description="Markdown source to render.")],
    index: Annotated[int, Field(description="Body index to insert at; 1 is the start of the document.")] = 1,
) -> str:
    """
    Renders Markdown into an existing Google Doc as native headings, lists, tables and styled text.

    Args:
        document_id: ID of the document to write into.
        markdown: Markdown source (CommonMark plus tables, strikethrough and task lists).
        index: Body index to insert at. 1 is the start of the document.

    Returns:
        str: Confirmation message with the number of requests applied and a link.
    """
    document_id = validate_document_id(document_id)
    index = validate_positive_int(index, "index")
    logger.info(f"[insert_markdown] Invoked. Document ID: '{document_id}', index={index}, {len(markdown)} chars")

    if not markdown.strip():
        return f"Nothing to insert into document {document_id}: markdown is empty."

    service = get_container().docs_service
    request_count = await asyncio.to_thread(render_markdown_to_doc, service, document_id, markdown, index)

    link = DOC_LINK_TEMPLATE.format(document_id=document_id)
    logger.info(f"Inserted markdown into {document_id} with {request_count} requests")
    return f"Inserted markdown into document {document_id} at index {index} ({request_count} requests). Link: {link}"


@server.tool()
@handle_http_errors("create_doc")
async def create_doc(
    title: Annotated[str, Field(description="Title of the new document.")],
    content: Annotated[str, Field(description="Optional Markdown rendered into the new document.")] = "",
) -> str:
    """
    Creates a new Google Doc and optionally renders Markdown content into it.

    Args:
        title: Title of the new document.
        content: Optional Markdown rendered at the start of the body.

    Returns:
        str: Confirmation message with document ID and link.
    """
    logger.info(f"[create_doc] Invoked. Title='{title}'")

    service = get_container().docs_service
    doc = await asyncio.to_thread(service.documents().create(body={"title": title}).execute)
    document_id = doc.get("documentId")

    if content.strip():
        await asyncio.to_thread(render_markdown_to_doc, service, document_id, content, 1)

    link = DOC_LINK_TEMPLATE.format(document_id=document_id)
    logger.info(f"Successfully created Google Doc '{title}' (ID: {document_id}). Link: {link}")
    return f"Created Google Doc '{title}' (ID: {document_id}). Link: {link}"
