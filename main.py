# =============================================================================
# main.py  —  Entry Point for the Godsaeng Mate MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py                     # stdio (desktop MCP clients)
#   TRANSPORT=http python main.py      # HTTP JSON-RPC on $PORT (default 3000)
#   python main.py --http              # same as TRANSPORT=http
#
# WHAT HAPPENS:
#   1. Loads .env (KAKAO_REST_API_KEY, KAKAO_ACCESS_TOKEN, PORT, ...)
#   2. Sends all logging to stderr (stdout belongs to the stdio transport)
#   3. Warns about missing credentials.  Not fatal: the affected tools
#      answer with a login-required message instead.
#   4. Starts the chosen transport.  Both transports use the same
#      dispatcher (core/dispatcher.py).
# =============================================================================

import sys

from dotenv import load_dotenv

# Load before anything reads os.environ.
load_dotenv()

from core.config import load_settings, warn_missing_credentials
from core.constants import SERVER_NAME, SERVER_VERSION
from core.logging_setup import configure_logging, logger


def choose_transport(argv: list[str], configured: str) -> str:
    """`--http` / `--stdio` on the command line override TRANSPORT."""
    if "--http" in argv:
        return "http"
    if "--stdio" in argv:
        return "stdio"
    return "http" if configured == "http" else "stdio"


def run_stdio() -> None:
    from tools.mcp_server import mcp

    logger.info(f"{SERVER_NAME} v{SERVER_VERSION} running via stdio")
    mcp.run()


def run_http(host: str, port: int) -> None:
    import uvicorn

    logger.info(f"{SERVER_NAME} v{SERVER_VERSION} running on http://{host}:{port}")
    logger.info(f"MCP endpoint: http://{host}:{port}/mcp")
    logger.info(f"Health check: http://{host}:{port}/health")
    uvicorn.run("api.index:app", host=host, port=port, log_config=None)


def main(argv=None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings()
    configure_logging(settings.log_level)
    warn_missing_credentials(settings)

    if choose_transport(argv, settings.transport) == "http":
        run_http(settings.host, settings.port)
    else:
        run_stdio()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
