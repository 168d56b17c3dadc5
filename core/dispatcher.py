# =============================================================================
# core/dispatcher.py  —  Tool Dispatcher (the single switchboard)
# =============================================================================
#
# Given a tool name and raw arguments:
#
#   validating ──▶ executing ──▶ success | failure
#
#   1. look up the tool's (schema, adapter, formatter) triple
#   2. validate → typed record, or fail without calling the adapter
#   3. run the adapter → domain result, or DomainError
#   4. render → ToolEnvelope
#
# Every path returns a ToolEnvelope.  The stdio server, the HTTP app and
# the JSON-RPC handler all call dispatch(), so none of them sees a raw
# exception.  There are no retries and no loops back.
# =============================================================================

from dataclasses import dataclass
import logging
from typing import Any, Callable, Optional

import httpx

from core.config import Settings, load_settings
from core.constants import (
    BLOCK_SESSION_TOOL,
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    SEARCH_SPOT_TOOL,
    SEND_COMMITMENT_TOOL,
)
from core.errors import DomainError, ErrorKind
from core.formatters import render, render_failure
from core.calendar_events import create_event
from core.logging_setup import log_request, log_response, log_status
from core.messages import send_commitment
from core.models import ToolEnvelope
from core.places import search_spots
from core.schemas import (
    BlockSessionInput,
    SearchSpotInput,
    SendCommitmentInput,
    ToolInput,
    validate,
)


logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "알 수 없는 오류가 발생했습니다."


@dataclass(frozen=True)
class ToolSpec:
    """Everything the dispatcher needs to know about one tool."""

    name: str
    title: str
    description: str
    schema: type[ToolInput]
    run: Callable[..., Any]            # adapter(args, settings, client=None)
    requires_login: bool = False

    def input_schema(self) -> dict:
        return self.schema.model_json_schema()

    def descriptor(self) -> dict:
        """MCP `tools/list` entry."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


# -----------------------------------------------------------------------------
# Tool table
# -----------------------------------------------------------------------------
# The descriptions are what the LLM reads when deciding whether to call a
# tool, so they spell out arguments and give example utterances.
# -----------------------------------------------------------------------------
TOOLS: dict[str, ToolSpec] = {
    SEARCH_SPOT_TOOL: ToolSpec(
        name=SEARCH_SPOT_TOOL,
        title="Search Productivity Spot",
        description=(
            "Search for productivity spots (cafes, gyms, coworking spaces) based on purpose "
            "and location, using the Kakao Local API.\n\n"
            "Args:\n"
            "  - purpose: 'study' | 'exercise' | 'reading' | 'work'\n"
            "  - location: where to search around (e.g., '홍대입구역', '강남역')\n"
            "  - keyword (optional): extra keyword (e.g., '24시간', '조용한')\n"
            "  - radius (optional): meters, 100-20000 (default 500)\n"
            "  - limit (optional): 1-15 results (default 5)\n"
            "  - response_format (optional): 'markdown' | 'json' (default 'markdown')\n\n"
            "Examples:\n"
            "  - \"홍대역 근처 스터디카페 찾아줘\" -> purpose=\"study\", location=\"홍대역\"\n"
            "  - \"강남역 주변 헬스장\" -> purpose=\"exercise\", location=\"강남역\""
        ),
        schema=SearchSpotInput,
        run=search_spots,
    ),
    BLOCK_SESSION_TOOL: ToolSpec(
        name=BLOCK_SESSION_TOOL,
        title="Block Focus Session",
        description=(
            "Create a focus session event in Kakao Talk Calendar, with a reminder.\n\n"
            "Requires Kakao login (OAuth scope: talk_calendar).\n\n"
            "Args:\n"
            "  - title: event title, up to 50 chars (e.g., '자격증 공부')\n"
            "  - start_time: ISO 8601 (e.g., '2026-01-15T19:00:00'); no offset means Korea time\n"
            f"  - duration_minutes: {MIN_DURATION_MINUTES}-{MAX_DURATION_MINUTES}\n"
            "  - location_name / location_address (optional)\n"
            "  - reminder_minutes (optional): 0-1440, rounded to 5 (default 15, 0 = none)\n"
            "  - color (optional): BLUE, RED, YELLOW, GREEN, PINK, ORANGE, PURPLE, GRAY\n\n"
            "Example:\n"
            "  - \"오늘 저녁 7시부터 2시간 공부 일정 잡아줘\" -> title=\"공부\", "
            "start_time=\"2026-01-15T19:00:00\", duration_minutes=120"
        ),
        schema=BlockSessionInput,
        run=create_event,
        requires_login=True,
    ),
    SEND_COMMITMENT_TOOL: ToolSpec(
        name=SEND_COMMITMENT_TOOL,
        title="Send Commitment Card",
        description=(
            "Send a commitment card to Kakao Talk \"나에게 보내기\" (Send to Me).\n\n"
            "Requires Kakao login (OAuth scope: talk_message).\n\n"
            "Args:\n"
            "  - goal: today's goal, up to 200 chars (e.g., '자격증 공부 2시간')\n"
            "  - location_name (optional): where the goal happens\n"
            "  - location_url (optional): Kakao Map URL; adds a '지도 보기' button\n"
            "  - encouragement (optional): custom line (default: a random one)\n"
            "  - template_type (optional): 'feed' | 'text' (default 'feed')\n\n"
            "Example:\n"
            "  - \"오늘 자격증 공부 2시간 하겠다고 다짐 카드 보내줘\" -> goal=\"자격증 공부 2시간\""
        ),
        schema=SendCommitmentInput,
        run=send_commitment,
        requires_login=True,
    ),
}


def list_tools() -> list[dict]:
    return [spec.descriptor() for spec in TOOLS.values()]


def has_tool(name: str) -> bool:
    return name in TOOLS


def _failure(tool_name: str, error: DomainError) -> ToolEnvelope:
    envelope = ToolEnvelope(content=render_failure(tool_name, error), is_error=True)
    log_response(tool_name, envelope.content, is_error=True)
    return envelope


def _log_failure_kind(tool_name: str, error: DomainError) -> None:
    if error.kind in (ErrorKind.VALIDATION_FAILED, ErrorKind.UNKNOWN_TOOL):
        log_status(f"Rejected input: {error.message}")
    elif error.kind in (ErrorKind.CONFIG_MISSING, ErrorKind.UNAUTHORIZED, ErrorKind.FORBIDDEN):
        log_status(f"Authentication problem ({error.kind.value}); caller must log in again")
    elif error.transient:
        log_status(f"Transient failure ({error.kind.value}); caller may retry")
    else:
        logger.warning(f"{tool_name} failed: {error.kind.value} status={error.status}")


def dispatch(
    tool_name: str,
    raw_args: Optional[dict] = None,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> ToolEnvelope:
    """Run one tool call end to end.  Never raises."""
    raw_args = {} if raw_args is None else raw_args
    log_request(tool_name, raw_args if isinstance(raw_args, dict) else {"arguments": raw_args})

    # --- validating ---
    args = validate(tool_name, raw_args)
    if isinstance(args, DomainError):
        _log_failure_kind(tool_name, args)
        return _failure(tool_name, args)

    spec = TOOLS[tool_name]
    settings = settings or load_settings()

    # --- executing ---
    try:
        outcome = spec.run(args, settings, client=client)
        if isinstance(outcome, DomainError):
            _log_failure_kind(tool_name, outcome)
            return _failure(tool_name, outcome)

        response_format = getattr(args, "response_format", "markdown")
        envelope = ToolEnvelope(content=render(outcome, response_format), is_error=False)
    except Exception:
        logger.exception(f"Unexpected error while running {tool_name}")
        return _failure(
            tool_name,
            DomainError(kind=ErrorKind.PROVIDER_ERROR, message=UNEXPECTED_ERROR_MESSAGE),
        )

    log_response(tool_name, envelope.content)
    return envelope
