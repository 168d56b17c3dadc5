# =============================================================================
# core/messages.py  —  Message-send adapter (Kakao Talk "send to me")
# =============================================================================
#
# Sends a commitment card to the user's own Kakao Talk chat.  Two template
# shapes are supported:
#   feed  →  rich card with title, description, link and an optional
#            "지도 보기" button
#   text  →  one plain string, hard-cut at 200 characters
# =============================================================================

import json
import logging
import random
from typing import Optional, Union

import httpx

from core.config import Settings
from core.constants import (
    ENCOURAGEMENT_MESSAGES,
    FALLBACK_LINK_URL,
    KAKAO_MESSAGE_SEND_TO_ME_URL,
    TEXT_TEMPLATE_MAX_CHARS,
)
from core.errors import (
    DomainError,
    config_missing,
    forbidden,
    provider_error,
    unauthorized,
)
from core.http_client import bearer_headers, client_scope, send
from core.models import MessageConfirmation
from core.schemas import SendCommitmentInput


logger = logging.getLogger(__name__)

SEND_ACTION = "메시지 전송"
MESSAGE_SCOPE = "talk_message"
CARD_TITLE = "오늘의 갓생 목표"
MAP_BUTTON_TITLE = "지도 보기"
SENT_MESSAGE = "다짐 카드가 카카오톡 '나와의 채팅'으로 전송되었습니다!"


def pick_encouragement(custom: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
    """The caller's line if given, else a random stock phrase."""
    if custom:
        return custom
    chooser = rng or random
    return chooser.choice(ENCOURAGEMENT_MESSAGES)


def _link(location_url: Optional[str]) -> dict:
    url = location_url or FALLBACK_LINK_URL
    return {"web_url": url, "mobile_web_url": url}


def build_feed_template(
    goal: str,
    encouragement: str,
    location_name: Optional[str] = None,
    location_url: Optional[str] = None,
) -> dict:
    if location_name:
        description = f"{goal}\n\n장소: {location_name}\n\n{encouragement}"
    else:
        description = f"{goal}\n\n{encouragement}"

    template = {
        "object_type": "feed",
        "content": {
            "title": CARD_TITLE,
            "description": description,
            "link": _link(location_url),
        },
    }
    if location_url:
        template["buttons"] = [{"title": MAP_BUTTON_TITLE, "link": _link(location_url)}]
    return template


def build_text_template(goal: str, encouragement: str, location_url: Optional[str] = None) -> dict:
    text = f"[{CARD_TITLE}]\n\n{goal}\n\n{encouragement}"
    return {
        "object_type": "text",
        "text": text[:TEXT_TEMPLATE_MAX_CHARS],
        "link": _link(location_url),
    }


def build_template(args: SendCommitmentInput, encouragement: str) -> dict:
    if args.template_type == "text":
        return build_text_template(args.goal, encouragement, args.location_url)
    return build_feed_template(args.goal, encouragement, args.location_name, args.location_url)


def _classify(response: httpx.Response) -> Optional[DomainError]:
    if response.is_success:
        return None
    if response.status_code == 401:
        return unauthorized()
    if response.status_code == 403:
        return forbidden(MESSAGE_SCOPE)
    return provider_error(SEND_ACTION, status=response.status_code)


def send_commitment(
    args: SendCommitmentInput,
    settings: Settings,
    client: Optional[httpx.Client] = None,
    rng: Optional[random.Random] = None,
) -> Union[MessageConfirmation, DomainError]:
    """Send one commitment card for a validated request."""
    if not settings.has_access_token:
        return config_missing()

    encouragement = pick_encouragement(args.encouragement, rng)
    template = build_template(args, encouragement)

    with client_scope(client) as http:
        response = send(
            http,
            "POST",
            KAKAO_MESSAGE_SEND_TO_ME_URL,
            SEND_ACTION,
            headers=bearer_headers(settings.kakao_access_token),
            data={"template_object": json.dumps(template, ensure_ascii=False)},
        )

    if isinstance(response, DomainError):
        return response
    error = _classify(response)
    if error is not None:
        return error

    logger.info(f"Sent {args.template_type} commitment card")
    return MessageConfirmation(
        success=True,
        goal=args.goal,
        location=args.location_name or None,
        encouragement=encouragement,
        message=SENT_MESSAGE,
    )
