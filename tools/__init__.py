# =============================================================================
# tools/__init__.py
# =============================================================================
# Protocol bindings for the dispatcher in core/.
#
#   mcp_server.py  →  FastMCP server for the stdio transport
#   jsonrpc.py     →  stateless JSON-RPC handler behind the HTTP app
#
# Neither module contains tool logic.  Both call core.dispatcher.dispatch(),
# so validation, API calls and rendering happen in exactly one place.
# =============================================================================
