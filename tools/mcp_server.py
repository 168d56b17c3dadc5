# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (stdio binding)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the three Godsaeng Mate tools over MCP stdio for desktop
#   clients.  Each tool is registered straight from core.dispatcher's
#   TOOLS table, so `tools/list` over stdio advertises the same input
#   schema (enums, ranges, length caps, descriptions) as the HTTP app.
#
# HOW IT WORKS (the flow):
#   1. The MCP client calls a tool by name (e.g. "godsaeng_search_spot")
#   2. FastMCP routes the call to the DispatchedTool registered below
#   3. The tool drops unset optionals and calls dispatch() in a worker
#      thread (the Kakao calls are blocking)
#   4. A success envelope is returned as text.  A failure envelope is
#      raised as ToolError, which FastMCP reports with isError=true.
#
#   Arguments reach core.schemas untouched, so a type mismatch gets the
#   same "입력 오류: ..." message on both transports.
#
# RUNNING THIS SERVER:
#   python main.py                   (TRANSPORT defaults to stdio)
#   python -m tools.mcp_server
# =============================================================================

import asyncio
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool, ToolResult

from core.constants import SERVER_NAME
from core.dispatcher import TOOLS, ToolSpec, dispatch


mcp = FastMCP(SERVER_NAME)


def run_tool(tool_name: str, arguments: dict[str, Any]) -> str:
    """Dispatch with unset optionals removed so schema defaults apply."""
    provided = {key: value for key, value in arguments.items() if value is not None}
    envelope = dispatch(tool_name, provided)
    if envelope.is_error:
        raise ToolError(envelope.content)
    return envelope.content


class DispatchedTool(Tool):
    """A FastMCP tool whose schema and behaviour live in core.dispatcher."""

    @classmethod
    def from_spec(cls, spec: ToolSpec) -> "DispatchedTool":
        return cls(
            name=spec.name,
            title=spec.title,
            description=spec.description,
            parameters=spec.input_schema(),
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        text = await asyncio.to_thread(run_tool, self.name, arguments or {})
        return ToolResult(content=text)


# =============================================================================
# TOOL REGISTRATION
#   godsaeng_search_spot      (no login needed, uses the REST API key)
#   godsaeng_block_session    (needs KAKAO_ACCESS_TOKEN)
#   godsaeng_send_commitment  (needs KAKAO_ACCESS_TOKEN)
# =============================================================================
for _spec in TOOLS.values():
    mcp.add_tool(DispatchedTool.from_spec(_spec))


if __name__ == "__main__":
    from dotenv import load_dotenv

    from core.config import load_settings, warn_missing_credentials
    from core.logging_setup import configure_logging

    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    warn_missing_credentials(settings)
    mcp.run()
