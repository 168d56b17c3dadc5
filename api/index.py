# =============================================================================
# api/index.py  —  HTTP binding & serverless handler
# =============================================================================
#
# A FastAPI app that speaks stateless MCP JSON-RPC.  It serves two runtimes:
#   - long-running:  `TRANSPORT=http python main.py` runs it under uvicorn
#   - serverless:    platforms that mount an ASGI `app` (e.g. Vercel's
#                    Python runtime picks up api/index.py) invoke it per request
#
# Routes:
#   GET    /               server info + tool names
#   GET    /health         liveness probe
#   POST   /mcp, /api      JSON-RPC (see tools/jsonrpc.py)
#   DELETE /mcp            session cleanup acknowledgement (we keep no sessions)
# =============================================================================

from datetime import datetime, timezone
import json

from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import load_settings, warn_missing_credentials
from core.constants import SERVER_NAME, SERVER_VERSION
from core.dispatcher import TOOLS
from core.logging_setup import configure_logging
from tools.jsonrpc import handle_message, parse_error_reply


# Serverless platforms import this module directly, without main.py.
_settings = load_settings()
configure_logging(_settings.log_level)
warn_missing_credentials(_settings)

app = FastAPI(title="Godsaeng Mate MCP Server", version=SERVER_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "mcp-session-id", "x-session-id", "Accept", "Authorization"],
)


@app.get("/")
def server_info():
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": "Godsaeng Mate MCP Server - Your productivity partner for God-saeng life",
        "tools": list(TOOLS),
        "endpoint": "/mcp",
    }


@app.get("/health")
def health():
    return {
        "status": "ok",
        "server": SERVER_NAME,
        "version": SERVER_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tools": list(TOOLS),
    }


# Kakao calls are blocking, so this runs in the threadpool.
def _handle_body(raw: bytes) -> Response:
    try:
        message = json.loads(raw)
    except ValueError:
        reply = parse_error_reply()
    else:
        reply = handle_message(message)

    if reply.body is None:
        return Response(status_code=reply.status)
    return JSONResponse(status_code=reply.status, content=reply.body)


@app.post("/mcp")
@app.post("/api")
@app.post("/api/")
async def mcp_endpoint(request: Request) -> Response:
    raw = await request.body()
    return await run_in_threadpool(_handle_body, raw)


@app.delete("/mcp")
def end_session():
    return {"success": True}
