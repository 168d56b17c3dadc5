# =============================================================================
# core/logging_setup.py  —  Logging to STDERR with coloured tool traffic
# =============================================================================
#
# Logs go to STDERR because in stdio mode STDOUT *is* the MCP transport.
# A stray line on stdout would corrupt the JSON-RPC stream.
#
# ANSI colours make tool traffic easy to scan:
#   CYAN    incoming tool calls (name + arguments)
#   YELLOW  intermediate status
#   GREEN   outgoing envelopes
#   RED     failure envelopes
# =============================================================================

import json
import logging
import sys


_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logger = logging.getLogger("godsaeng")

# Envelope previews beyond this many characters are cut in the log line.
_PREVIEW_CHARS = 300


def configure_logging(level: str = "INFO") -> None:
    """Route all logging to stderr.  Safe to call more than once."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # httpx logs every request at INFO, which would double our own lines.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_request(tool_name: str, params: dict) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, content: str, is_error: bool = False) -> None:
    """Log the outgoing envelope as a compact one-line preview."""
    preview = json.dumps(content[:_PREVIEW_CHARS], ensure_ascii=False)
    if len(content) > _PREVIEW_CHARS:
        preview += f" (+{len(content) - _PREVIEW_CHARS} chars)"
    colour = _RED if is_error else _GREEN
    status = "error" if is_error else "response"
    logger.info(f"{colour}  ← {tool_name} {status}: {preview}{_RESET}")
