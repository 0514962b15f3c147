"""MCP server exposing archived tweets as resources and a sampling tool.

Resources:
    - tweet-list://recent: every tweet, most recent first
    - tweet://{id}: one tweet with links expanded
    - tweet-text://{id}: original text of one tweet

Tools:
    - sample_tweet_texts: random sanitized texts of original tweets
"""

import json

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, ResourceTemplate, TextContent, Tool

from xarchive import __version__
from xarchive.core.catalog import (
    LIST_URI,
    TWEET_TEXT_URI_TEMPLATE,
    TWEET_URI_TEMPLATE,
    ResourceCatalog,
)
from xarchive.core.orchestrator import ArchiveService
from xarchive.core.sampler import TOOL_NAME, SampleTool
from xarchive.exceptions import ToolNotFoundError
from xarchive.logging import get_logger

SERVER_NAME = "twitter-archive"

JSON_MIME = "application/json"
TEXT_MIME = "text/plain"

SAMPLE_TOOL = Tool(
    name=TOOL_NAME,
    description="Random sample of original (non-retweet) tweet texts with mentions, "
    "hashtags, and links replaced by placeholder tokens.",
    inputSchema={
        "type": "object",
        "properties": {
            "sampleSize": {
                "type": "string",
                "description": "Number of tweets to sample (default: 5)",
            }
        },
    },
)


def render_contents(payload: dict) -> list[ReadResourceContents]:
    """
    Turn a catalog payload into MCP resource contents.

    Items carrying only ``uri`` and ``text`` are sent as their text;
    full records are serialized as JSON.
    """
    rendered = []
    for item in payload["contents"]:
        if set(item) <= {"uri", "text"}:
            rendered.append(ReadResourceContents(content=item.get("text", ""), mime_type=TEXT_MIME))
        else:
            rendered.append(
                ReadResourceContents(
                    content=json.dumps(item, ensure_ascii=False),
                    mime_type=JSON_MIME,
                )
            )
    return rendered


async def read_resource_contents(catalog: ResourceCatalog, uri: str) -> list[ReadResourceContents]:
    """Resolve a URI through the catalog and render it."""
    return render_contents(await catalog.read(uri))


async def call_tool_content(sampler: SampleTool, name: str, arguments: dict | None) -> list[TextContent]:
    """
    Run a named tool.

    Raises:
        ToolNotFoundError: If ``name`` is not served
    """
    if name != TOOL_NAME:
        raise ToolNotFoundError(f"Unknown tool: {name}")

    result = await sampler.call(arguments)
    return [TextContent(type=item["type"], text=item["text"]) for item in result["content"]]


def create_server(service: ArchiveService) -> Server:
    """
    Build an MCP server bound to one archive service.

    Archive errors raised by handlers become protocol-level errors.
    """
    server = Server(SERVER_NAME, version=__version__)
    log = get_logger("server")

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return [
            Resource(
                uri=LIST_URI,
                name="tweet-list",
                description="All tweets in the archive, most recent first",
                mimeType=JSON_MIME,
            )
        ]

    @server.list_resource_templates()
    async def list_resource_templates() -> list[ResourceTemplate]:
        return [
            ResourceTemplate(
                uriTemplate=TWEET_URI_TEMPLATE,
                name="tweet",
                description="A single tweet with expanded links",
                mimeType=JSON_MIME,
            ),
            ResourceTemplate(
                uriTemplate=TWEET_TEXT_URI_TEMPLATE,
                name="tweet-text",
                description="Original text of a single tweet",
                mimeType=TEXT_MIME,
            ),
        ]

    @server.read_resource()
    async def read_resource(uri) -> list[ReadResourceContents]:
        log.debug("read_resource", uri=str(uri))
        return await read_resource_contents(service.catalog, str(uri))

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [SAMPLE_TOOL]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        log.debug("call_tool", tool=name)
        return await call_tool_content(service.sampler, name, arguments)

    return server


async def serve(service: ArchiveService) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    server = create_server(service)
    log = get_logger("server")
    log.info("server_start", archive=str(service.reader.archive_path))

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
