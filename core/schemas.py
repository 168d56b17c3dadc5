# =============================================================================
# core/schemas.py  —  Input Schema Validator
# =============================================================================
#
# One pydantic model per tool.  A model turns the freeform argument mapping
# from the protocol layer into a closed, typed record:
#   - unknown keys are rejected (extra="forbid")
#   - strings are whitespace-trimmed before length checks
#   - defaults are filled in
#   - every range / enum / pattern constraint is checked
#
# Once a model instance exists, all of its constraints hold.  Instances are
# frozen and live only as long as the request.
#
# The same models publish the JSON Schema that `tools/list` advertises.
# =============================================================================

from datetime import datetime, timedelta, timezone
from typing import Any, Literal, Optional, Union

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from core.constants import (
    BLOCK_SESSION_TOOL,
    DEFAULT_LIMIT,
    DEFAULT_RADIUS,
    DEFAULT_REMINDER_MINUTES,
    MAX_DURATION_MINUTES,
    MAX_LIMIT,
    MAX_RADIUS,
    MAX_REMINDER_MINUTES,
    MIN_DURATION_MINUTES,
    MIN_RADIUS,
    SEARCH_SPOT_TOOL,
    SEND_COMMITMENT_TOOL,
    SERVICE_UTC_OFFSET_HOURS,
)
from core.errors import DomainError, unknown_tool, validation_failed


ISO_8601_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?(Z|[+-]\d{2}:\d{2})?$"

Purpose = Literal["study", "exercise", "reading", "work"]
ResponseFormat = Literal["markdown", "json"]
CalendarColor = Literal["BLUE", "RED", "YELLOW", "GREEN", "PINK", "ORANGE", "PURPLE", "GRAY"]
TemplateType = Literal["feed", "text"]

_URL_ADAPTER = TypeAdapter(AnyUrl)

# Korea has no DST, so a fixed offset is exact.
SERVICE_TZ = timezone(timedelta(hours=SERVICE_UTC_OFFSET_HOURS), "KST")


def parse_iso_datetime(value: str) -> datetime:
    """Parse the accepted ISO 8601 forms, including a trailing "Z"."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def resolve_start(start_time: str) -> datetime:
    """Aware datetime for the input; naive inputs are read as service time."""
    start = parse_iso_datetime(start_time)
    if start.tzinfo is None:
        start = start.replace(tzinfo=SERVICE_TZ)
    return start


class ToolInput(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
    )


# -----------------------------------------------------------------------------
# godsaeng_search_spot
# -----------------------------------------------------------------------------
class SearchSpotInput(ToolInput):
    purpose: Purpose = Field(
        description=(
            "Purpose of the productivity spot: 'study' for cafes/study rooms, "
            "'exercise' for gyms/fitness centers, 'reading' for book cafes/libraries, "
            "'work' for coworking spaces"
        ),
    )
    location: str = Field(
        min_length=1,
        max_length=100,
        description="Location to search around (e.g., '홍대입구역', '강남역', '서울시 마포구')",
    )
    keyword: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Additional search keyword (e.g., '24시간', '조용한')",
    )
    radius: int = Field(
        strict=True,
        default=DEFAULT_RADIUS,
        ge=MIN_RADIUS,
        le=MAX_RADIUS,
        description="Search radius in meters (default: 500, max: 20000)",
    )
    limit: int = Field(
        strict=True,
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        description="Maximum number of results to return (default: 5, max: 15)",
    )
    response_format: ResponseFormat = Field(
        default="markdown",
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


# -----------------------------------------------------------------------------
# godsaeng_block_session
# -----------------------------------------------------------------------------
class BlockSessionInput(ToolInput):
    title: str = Field(
        min_length=1,
        max_length=50,
        description="Event title (e.g., '자격증 공부', '헬스장 운동')",
    )
    location_name: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Name of the location (e.g., '북카페 콤마')",
    )
    location_address: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Address of the location",
    )
    start_time: str = Field(
        pattern=ISO_8601_PATTERN,
        description="Start time in ISO 8601 format (e.g., '2026-01-15T19:00:00')",
    )
    duration_minutes: int = Field(
        strict=True,
        ge=MIN_DURATION_MINUTES,
        le=MAX_DURATION_MINUTES,
        description="Duration in minutes (e.g., 120 for 2 hours)",
    )
    reminder_minutes: int = Field(
        strict=True,
        default=DEFAULT_REMINDER_MINUTES,
        ge=0,
        le=MAX_REMINDER_MINUTES,
        description="Reminder time in minutes before the event (default: 15)",
    )
    color: CalendarColor = Field(
        default="BLUE",
        description="Calendar event color",
    )

    @field_validator("start_time")
    @classmethod
    def _must_be_real_datetime(cls, value: str) -> str:
        # The pattern admits "2026-13-45T25:00"; make sure it parses.
        try:
            start = resolve_start(value)
        except ValueError:
            raise ValueError("Invalid ISO 8601 datetime (e.g., '2026-01-15T19:00:00')")
        # The longest session must still convert to UTC and to service time.
        try:
            end = start + timedelta(minutes=MAX_DURATION_MINUTES)
            for moment in (start, end):
                moment.astimezone(timezone.utc)
                moment.astimezone(SERVICE_TZ)
        except OverflowError:
            raise ValueError("start_time is out of the supported date range")
        return value


# -----------------------------------------------------------------------------
# godsaeng_send_commitment
# -----------------------------------------------------------------------------
class SendCommitmentInput(ToolInput):
    goal: str = Field(
        min_length=1,
        max_length=200,
        description="Today's goal (e.g., '자격증 공부 2시간', '헬스장에서 운동 1시간')",
    )
    location_name: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Name of the location where you'll achieve the goal",
    )
    location_url: Optional[str] = Field(
        default=None,
        description="Kakao Map URL for the location (e.g., 'https://place.map.kakao.com/...')",
    )
    encouragement: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Custom encouragement message (default: random positive message)",
    )
    template_type: TemplateType = Field(
        default="feed",
        description="Message template type: 'feed' for rich card, 'text' for simple text",
    )

    @field_validator("location_url")
    @classmethod
    def _must_be_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError:
            raise ValueError("Invalid URL format")
        # Keep the caller's string; AnyUrl would normalize it.
        return value


SCHEMAS: dict[str, type[ToolInput]] = {
    SEARCH_SPOT_TOOL: SearchSpotInput,
    BLOCK_SESSION_TOOL: BlockSessionInput,
    SEND_COMMITMENT_TOOL: SendCommitmentInput,
}


def describe_validation_error(exc: ValidationError) -> str:
    """Collapse every pydantic error into one `field: reason; ...` line."""
    parts = []
    for error in exc.errors():
        field_path = ".".join(str(p) for p in error.get("loc", ())) or "arguments"
        message = error.get("msg", "invalid value")
        # field_validator errors arrive as "Value error, <text>"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{field_path}: {message}")
    return "; ".join(parts)


def validate(tool_name: str, raw_args: Any) -> Union[ToolInput, DomainError]:
    """Validate raw arguments for a tool.

    Returns the typed record, or a DomainError (UNKNOWN_TOOL or
    VALIDATION_FAILED).  Never raises.
    """
    schema = SCHEMAS.get(tool_name)
    if schema is None:
        return unknown_tool(tool_name)

    if raw_args is None:
        raw_args = {}
    if not isinstance(raw_args, dict):
        return validation_failed("arguments: Input should be an object")

    try:
        return schema.model_validate(raw_args)
    except ValidationError as exc:
        return validation_failed(describe_validation_error(exc))
