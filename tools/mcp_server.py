# =============================================================================
# tools/mcp_server.py  -  FastMCP Server (transport binding for the n8n tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Puts the tool-dispatch layer from core/ on the wire.  It:
#     1. Registers one FastMCP tool per entry in core.catalog.TOOL_CATALOG,
#        publishing the catalog's inputSchema verbatim
#     2. Sends every tools/call through core.dispatcher.Dispatcher
#     3. Turns core ProtocolErrors into MCP protocol errors
#     4. Owns the process lifecycle: stdio transport, HTTP client, SIGINT
#
# WHY NOT @mcp.tool() ON TYPED FUNCTIONS?
#   FastMCP would derive a schema from the Python signature and validate the
#   arguments itself.  Here the catalog is the schema and the validators in
#   core/ own the argument contract (with their exact error messages), so
#   each tool is a small Tool subclass that forwards the raw arguments.
#
# RUNNING THIS SERVER:
#     a) Via the entry point:  python main.py
#     b) Directly:             python -m tools.mcp_server
#   A host (Claude Desktop, an ADK agent, ...) spawns it and talks over stdio.
# =============================================================================

import asyncio
import logging
import os
import signal
import sys
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from core.catalog import TOOL_CATALOG
from core.config import Settings, load_settings
from core.dispatcher import Dispatcher
from core.errors import ProtocolError
from core.models import CallResult, ToolDescriptor
from core.n8n_client import N8nClient

SERVER_NAME = "n8n-server"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP JSON stream, so every log line goes to STDERR.
# A stray print() here would corrupt the protocol and the host would drop
# the connection.
#
# Color coding, same as the rest of our MCP servers:
#   CYAN   incoming tool calls
#   GREEN  responses
#   YELLOW status / lifecycle messages
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_PREVIEW_CHARS = 500


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, /, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: CallResult) -> CallResult:
    """Log a one-line preview of the response text in GREEN, then return it."""
    preview = " ".join(" ".join(block.text.split()) for block in result.content)
    if len(preview) > _PREVIEW_CHARS:
        preview = preview[:_PREVIEW_CHARS] + "..."
    logging.info(f"{_GREEN}  ← {tool_name} response: {preview}{_RESET}")
    return result


# =============================================================================
# WorkflowTool  -  a catalog entry bound to the dispatcher
# =============================================================================
class WorkflowTool(Tool):
    dispatcher: Any = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: Dispatcher) -> "WorkflowTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, **(arguments or {}))
        try:
            result = await self.dispatcher.dispatch(self.name, arguments)
        except ProtocolError as exc:
            # FastMCP reports a ToolError as an isError result carrying this
            # exact message; the JSON-RPC kind only reaches the log.
            _log_status(f"{self.name} failed ({exc.kind.name}): {exc.message}")
            raise ToolError(exc.message) from exc

        _log_response(self.name, result)
        return ToolResult(
            content=[TextContent(type="text", text=block.text) for block in result.content]
        )


def create_server(dispatcher: Dispatcher) -> FastMCP:
    """Build a FastMCP server exposing every catalog entry, in catalog order."""
    server = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    for descriptor in TOOL_CATALOG:
        server.add_tool(WorkflowTool.from_descriptor(descriptor, dispatcher))
    return server


# =============================================================================
# Lifecycle
# =============================================================================
# Two ways out:
#   - the host closes stdin: the transport task finishes, serve() returns.
#   - SIGINT: the HTTP client is closed and the process exits with code 0
#     right away.  The stdio transport reads stdin in a worker thread that
#     cannot be cancelled while the host keeps the pipe open, so waiting
#     for that task would hang until the host lets go.
# Calls already sent to n8n are not cancelled individually.
# =============================================================================
async def serve(settings: Settings) -> None:
    if settings.missing:
        logging.error(
            "N8N_API_URL and N8N_API_KEY environment variables are required "
            f"(missing: {', '.join(settings.missing)})"
        )

    client = N8nClient(settings.api_url, settings.api_key)
    _log_status(f"Connecting to n8n API: {client.base_url}")
    server = create_server(Dispatcher(client))

    stop = asyncio.Event()
    asyncio.get_running_loop().add_signal_handler(signal.SIGINT, stop.set)

    serving = asyncio.create_task(server.run_async(transport="stdio"))
    stopping = asyncio.create_task(stop.wait())
    _log_status("n8n MCP server running on stdio")

    done, _ = await asyncio.wait({serving, stopping}, return_when=asyncio.FIRST_COMPLETED)

    if stopping in done:
        _log_status("SIGINT received, shutting down")
        await client.aclose()
        logging.shutdown()
        os._exit(0)

    stopping.cancel()
    try:
        serving.result()
    finally:
        await client.aclose()


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    asyncio.run(serve(settings))
    sys.exit(0)


if __name__ == "__main__":
    load_dotenv()
    run()
