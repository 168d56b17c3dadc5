# =============================================================================
# core/formatters.py  —  Result Formatter
# =============================================================================
#
# Turns a domain result into the text the MCP client sees.
#
#   json      →  the dataclass, field for field.  Never truncated.
#   markdown  →  a short hand-written report per result type.
#
# Failures go through render_failure(): a "...실패" heading and the error
# message, with no partial data.  Rendering is a pure function, so the same
# input always gives byte-identical text.
# =============================================================================

from dataclasses import asdict
import json
from typing import Union

from core.constants import (
    BLOCK_SESSION_TOOL,
    CHARACTER_LIMIT,
    PURPOSES,
    SEARCH_SPOT_TOOL,
    SEND_COMMITMENT_TOOL,
)
from core.errors import DomainError
from core.models import CalendarConfirmation, MessageConfirmation, SearchSpotResult


TRUNCATION_NOTICE = "\n\n---\n*결과가 너무 길어 일부가 생략되었습니다. limit 값을 줄이거나 검색 조건을 좁혀보세요.*"

FAILURE_HEADINGS = {
    SEARCH_SPOT_TOOL: "장소 검색 실패",
    BLOCK_SESSION_TOOL: "일정 등록 실패",
    SEND_COMMITMENT_TOOL: "다짐 카드 전송 실패",
}

DomainResult = Union[SearchSpotResult, CalendarConfirmation, MessageConfirmation]


def render_json(result: DomainResult) -> str:
    return json.dumps(asdict(result), ensure_ascii=False, indent=2)


def truncate(text: str, limit: int = CHARACTER_LIMIT, notice: str = TRUNCATION_NOTICE) -> str:
    """Hard-cut `text` so that text + notice is exactly `limit` chars."""
    if len(text) <= limit:
        return text
    return text[: limit - len(notice)] + notice


# -----------------------------------------------------------------------------
# Markdown renderers
# -----------------------------------------------------------------------------

def render_search_markdown(result: SearchSpotResult) -> str:
    purpose = PURPOSES.get(result.purpose)
    label = purpose.label if purpose else result.purpose
    lines = [
        f"# {label} 장소 검색 결과",
        "",
        f"**검색어**: {result.query}",
        f"**위치**: {result.location}",
        f"**검색 결과**: {result.total}개",
        "",
    ]

    if not result.places:
        lines.append("검색 결과가 없습니다. 다른 키워드나 위치로 다시 검색해보세요.")
        return "\n".join(lines)

    for index, place in enumerate(result.places, start=1):
        lines.extend([
            f"## {index}. {place.name}",
            "",
            f"- **카테고리**: {place.category}",
            f"- **주소**: {place.road_address}",
            f"- **거리**: {place.distance}",
            f"- **전화**: {place.phone}",
            f"- **지도**: [카카오맵에서 보기]({place.map_url})",
            "",
        ])

    lines.append("---")
    lines.append("*장소를 선택하면 일정을 등록할 수 있습니다.*")
    return "\n".join(lines)


def render_calendar_markdown(result: CalendarConfirmation) -> str:
    lines = [
        "# 일정 등록 완료",
        "",
        f"**제목**: {result.title}",
        f"**시작**: {result.start_time}",
        f"**종료**: {result.end_time}",
    ]
    if result.location:
        lines.append(f"**장소**: {result.location}")
    if result.reminder > 0:
        lines.append(f"**알림**: {result.reminder}분 전")
    else:
        lines.append("**알림**: 없음")
    lines.extend(["", result.message])
    return "\n".join(lines)


def render_message_markdown(result: MessageConfirmation) -> str:
    lines = [
        "# 다짐 카드 전송 완료",
        "",
        f"**오늘의 목표**: {result.goal}",
    ]
    if result.location:
        lines.append(f"**장소**: {result.location}")
    lines.extend([
        f"**응원 메시지**: {result.encouragement}",
        "",
        result.message,
        "",
        "*카카오톡 '나와의 채팅'을 확인해보세요!*",
    ])
    return "\n".join(lines)


def render(result: DomainResult, response_format: str = "markdown") -> str:
    """Render a successful result in the requested format."""
    if response_format == "json":
        return render_json(result)

    if isinstance(result, SearchSpotResult):
        return truncate(render_search_markdown(result))
    if isinstance(result, CalendarConfirmation):
        return render_calendar_markdown(result)
    if isinstance(result, MessageConfirmation):
        return render_message_markdown(result)
    raise TypeError(f"No renderer for {type(result).__name__}")


def render_failure(tool_name: str, error: DomainError) -> str:
    heading = FAILURE_HEADINGS.get(tool_name)
    if heading is None:
        return error.message
    return f"# {heading}\n\n{error.message}"
