import json
import random
from urllib.parse import parse_qs

import pytest

from core.constants import ENCOURAGEMENT_MESSAGES, FALLBACK_LINK_URL
from core.errors import DomainError, ErrorKind
from core.messages import (
    build_feed_template,
    build_text_template,
    pick_encouragement,
    send_commitment,
)
from core.models import MessageConfirmation
from core.schemas import SendCommitmentInput


SEND_PATH = "/v2/api/talk/memo/default/send"
MAP_URL = "https://place.map.kakao.com/12345"


def _sent_template(request):
    form = parse_qs(request.content.decode("utf-8"))
    return json.loads(form["template_object"][0])


@pytest.mark.unit
def test_custom_encouragement_wins():
    assert pick_encouragement("할 수 있어") == "할 수 있어"


@pytest.mark.unit
def test_random_encouragement_comes_from_stock_phrases():
    rng = random.Random(7)
    for _ in range(20):
        assert pick_encouragement(None, rng) in ENCOURAGEMENT_MESSAGES
    assert pick_encouragement("", rng) in ENCOURAGEMENT_MESSAGES


@pytest.mark.unit
def test_feed_without_url_uses_fallback_link_and_no_button():
    template = build_feed_template("공부 2시간", "파이팅")
    assert template["object_type"] == "feed"
    assert template["content"]["title"] == "오늘의 갓생 목표"
    assert template["content"]["description"] == "공부 2시간\n\n파이팅"
    assert template["content"]["link"]["web_url"] == FALLBACK_LINK_URL
    assert "buttons" not in template


@pytest.mark.unit
def test_feed_with_location_and_url():
    template = build_feed_template("공부", "파이팅", "북카페 콤마", MAP_URL)
    assert template["content"]["description"] == "공부\n\n장소: 북카페 콤마\n\n파이팅"
    assert template["content"]["link"] == {"web_url": MAP_URL, "mobile_web_url": MAP_URL}
    (button,) = template["buttons"]
    assert button["title"] == "지도 보기"
    assert button["link"]["web_url"] == MAP_URL


@pytest.mark.unit
def test_text_template_is_cut_at_200_chars():
    template = build_text_template("목" * 180, "응원" * 30)
    assert len(template["text"]) == 200
    assert template["text"].startswith("[오늘의 갓생 목표]\n\n")


@pytest.mark.unit
def test_short_text_template_is_untouched():
    template = build_text_template("공부", "파이팅", MAP_URL)
    assert template["text"] == "[오늘의 갓생 목표]\n\n공부\n\n파이팅"
    assert template["link"]["mobile_web_url"] == MAP_URL


@pytest.mark.unit
def test_send_text_commitment(kakao, settings):
    kakao.routes[SEND_PATH] = (200, {"result_code": 0})
    args = SendCommitmentInput(goal="g" * 200, encouragement="e" * 100, template_type="text")

    result = send_commitment(args, settings, client=kakao.client())

    assert isinstance(result, MessageConfirmation)
    assert result.success is True
    (request,) = kakao.requests
    assert request.headers["Authorization"] == "Bearer access-token"
    template = _sent_template(request)
    assert template["object_type"] == "text"
    assert len(template["text"]) == 200


@pytest.mark.unit
def test_send_uses_random_encouragement_when_absent(kakao, settings):
    kakao.routes[SEND_PATH] = (200, {})
    args = SendCommitmentInput(goal="공부")

    result = send_commitment(args, settings, client=kakao.client(), rng=random.Random(1))

    assert result.encouragement in ENCOURAGEMENT_MESSAGES
    assert result.encouragement in _sent_template(kakao.requests[0])["content"]["description"]


@pytest.mark.unit
def test_missing_token_makes_no_call(kakao, no_credentials):
    result = send_commitment(SendCommitmentInput(goal="공부"), no_credentials, client=kakao.client())

    assert isinstance(result, DomainError)
    assert result.kind is ErrorKind.CONFIG_MISSING
    assert kakao.requests == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "status, kind",
    [(401, ErrorKind.UNAUTHORIZED), (403, ErrorKind.FORBIDDEN), (500, ErrorKind.PROVIDER_ERROR)],
)
def test_status_mapping(kakao, settings, status, kind):
    kakao.routes[SEND_PATH] = (status, {"msg": "raw"})

    result = send_commitment(SendCommitmentInput(goal="공부"), settings, client=kakao.client())

    assert result.kind is kind
    if kind is ErrorKind.FORBIDDEN:
        assert result.scope == "talk_message"
