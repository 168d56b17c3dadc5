# =============================================================================
# core/calendar_events.py  —  Calendar-create adapter (Kakao Talk Calendar API)
# =============================================================================
#
# Blocks a focus session on the user's Talk Calendar.
#
# Provider constraints handled here:
#   - timestamps go over the wire in UTC, second precision, "Z" suffix
#   - the event is always filed under Asia/Seoul
#   - reminders must be multiples of 5 minutes
# =============================================================================

from datetime import datetime, timedelta, timezone
import json
import logging
from typing import Optional, Union

import httpx

from core.config import Settings
from core.constants import (
    KAKAO_CALENDAR_CREATE_URL,
    REMINDER_STEP_MINUTES,
    SERVICE_TIME_ZONE,
)
from core.errors import (
    DomainError,
    config_missing,
    forbidden,
    provider_error,
    unauthorized,
)
from core.http_client import bearer_headers, client_scope, json_body, send
from core.models import CalendarConfirmation
from core.schemas import SERVICE_TZ, BlockSessionInput, resolve_start


logger = logging.getLogger(__name__)

CREATE_ACTION = "일정 생성"
CALENDAR_SCOPE = "talk_calendar"
CREATED_MESSAGE = "톡캘린더에 일정이 등록되었습니다!"
BAD_REQUEST_FALLBACK = "잘못된 요청입니다."


def snap_reminder(minutes: int) -> int:
    """Round to the nearest multiple of 5; halves round up."""
    step = REMINDER_STEP_MINUTES
    return (minutes + step // 2) // step * step


def to_wire_time(moment: datetime) -> str:
    """`2026-01-15T10:00:00Z`: UTC, no sub-second fraction."""
    return moment.astimezone(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_display_time(moment: datetime) -> str:
    return moment.astimezone(SERVICE_TZ).strftime("%Y-%m-%d %H:%M")


def build_event(args: BlockSessionInput) -> dict:
    """Event object for the `event` form field."""
    start = resolve_start(args.start_time)
    end = start + timedelta(minutes=args.duration_minutes)

    event = {
        "title": args.title,
        "time": {
            "start_at": to_wire_time(start),
            "end_at": to_wire_time(end),
            "time_zone": SERVICE_TIME_ZONE,
            "all_day": False,
        },
        "color": args.color,
        "description": f"갓생 메이트로 등록한 일정입니다.\n\n목표: {args.title}",
    }

    if args.location_name:
        location = {"name": args.location_name}
        if args.location_address:
            location["address"] = args.location_address
        event["location"] = location

    reminder = snap_reminder(args.reminder_minutes)
    if reminder > 0:
        event["reminders"] = [reminder]

    return event


def _classify(response: httpx.Response) -> Optional[DomainError]:
    if response.is_success:
        return None
    status = response.status_code
    if status == 401:
        return unauthorized()
    if status == 403:
        return forbidden(CALENDAR_SCOPE)
    if status == 400:
        detail = json_body(response).get("msg") or BAD_REQUEST_FALLBACK
        return provider_error(CREATE_ACTION, status=status, detail=str(detail))
    return provider_error(CREATE_ACTION, status=status)


def create_event(
    args: BlockSessionInput,
    settings: Settings,
    client: Optional[httpx.Client] = None,
) -> Union[CalendarConfirmation, DomainError]:
    """Create one calendar event for a validated request."""
    if not settings.has_access_token:
        return config_missing()

    event = build_event(args)

    with client_scope(client) as http:
        response = send(
            http,
            "POST",
            KAKAO_CALENDAR_CREATE_URL,
            CREATE_ACTION,
            headers=bearer_headers(settings.kakao_access_token),
            data={"event": json.dumps(event, ensure_ascii=False)},
        )

    if isinstance(response, DomainError):
        return response
    error = _classify(response)
    if error is not None:
        return error

    event_id = str(json_body(response).get("event_id", ""))
    logger.info(f"Created calendar event {event_id!r} ({args.title})")

    start = resolve_start(args.start_time)
    return CalendarConfirmation(
        success=True,
        event_id=event_id,
        title=args.title,
        start_time=to_display_time(start),
        end_time=to_display_time(start + timedelta(minutes=args.duration_minutes)),
        location=args.location_name or None,
        reminder=snap_reminder(args.reminder_minutes),
        message=CREATED_MESSAGE,
    )
