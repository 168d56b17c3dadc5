# =============================================================================
# core/constants.py  —  Fixed tables shared by every tool
# =============================================================================
#
# Endpoints, purpose-to-search mapping, calendar colours, encouragement
# phrases and the numeric limits the input schemas enforce.
# =============================================================================

from dataclasses import dataclass
from typing import Optional


SERVER_NAME = "godsaeng-mate-mcp-server"
SERVER_VERSION = "1.0.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"


# -----------------------------------------------------------------------------
# Kakao API endpoints
# -----------------------------------------------------------------------------
KAKAO_KEYWORD_SEARCH_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"
KAKAO_ADDRESS_SEARCH_URL = "https://dapi.kakao.com/v2/local/search/address.json"
KAKAO_CALENDAR_CREATE_URL = "https://kapi.kakao.com/v2/api/calendar/create/event"
KAKAO_MESSAGE_SEND_TO_ME_URL = "https://kapi.kakao.com/v2/api/talk/memo/default/send"

# Link target for message templates when no map URL was supplied.
FALLBACK_LINK_URL = "https://playmcp.kakao.com"


# -----------------------------------------------------------------------------
# Tool names
# -----------------------------------------------------------------------------
SEARCH_SPOT_TOOL = "godsaeng_search_spot"
BLOCK_SESSION_TOOL = "godsaeng_block_session"
SEND_COMMITMENT_TOOL = "godsaeng_send_commitment"


# -----------------------------------------------------------------------------
# Purpose table
# -----------------------------------------------------------------------------
# Each purpose picks a default keyword and, for cafe-like purposes, a Kakao
# category group code.  Gyms and coworking spaces have no matching group,
# so they rely on keyword matching alone.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PurposeConfig:
    """Search strategy for one activity purpose."""

    label: str                          # Korean label used in headings
    default_keyword: str                # Used when the caller gives no keyword
    category_code: Optional[str]        # Kakao category_group_code, or None
    keywords: tuple[str, ...] = ()      # Related terms, for tool descriptions


CAFE_CATEGORY_CODE = "CE7"

PURPOSES: dict[str, PurposeConfig] = {
    "study": PurposeConfig(
        label="공부",
        default_keyword="스터디카페",
        category_code=CAFE_CATEGORY_CODE,
        keywords=("스터디카페", "카공", "독서실"),
    ),
    "exercise": PurposeConfig(
        label="운동",
        default_keyword="헬스장",
        category_code=None,
        keywords=("헬스장", "피트니스", "필라테스", "요가"),
    ),
    "reading": PurposeConfig(
        label="독서",
        default_keyword="북카페",
        category_code=CAFE_CATEGORY_CODE,
        keywords=("북카페", "도서관", "독서"),
    ),
    "work": PurposeConfig(
        label="업무",
        default_keyword="코워킹스페이스",
        category_code=None,
        keywords=("코워킹스페이스", "공유오피스", "카페"),
    ),
}


CALENDAR_COLORS = ("BLUE", "RED", "YELLOW", "GREEN", "PINK", "ORANGE", "PURPLE", "GRAY")

ENCOURAGEMENT_MESSAGES = (
    "오늘 하루도 갓생 달성!",
    "작은 실천이 큰 변화를 만듭니다",
    "꾸준함이 실력이 됩니다",
    "오늘의 노력이 내일의 나를 만듭니다",
    "할 수 있다! 파이팅!",
    "시작이 반이다!",
    "포기하지 않는 당신이 멋집니다",
)


# -----------------------------------------------------------------------------
# Limits
# -----------------------------------------------------------------------------
REQUEST_TIMEOUT_SECONDS = 10.0

DEFAULT_RADIUS = 500
MIN_RADIUS = 100
MAX_RADIUS = 20000
DEFAULT_LIMIT = 5
MAX_LIMIT = 15

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 480
DEFAULT_REMINDER_MINUTES = 15
MAX_REMINDER_MINUTES = 1440
REMINDER_STEP_MINUTES = 5

TEXT_TEMPLATE_MAX_CHARS = 200
CHARACTER_LIMIT = 25000

# Calendar events are always filed in the service's home zone.
SERVICE_TIME_ZONE = "Asia/Seoul"
SERVICE_UTC_OFFSET_HOURS = 9

UNAVAILABLE = "정보 없음"
