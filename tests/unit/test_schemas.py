import pytest

from core.errors import DomainError, ErrorKind
from core.schemas import (
    BlockSessionInput,
    SearchSpotInput,
    SendCommitmentInput,
    validate,
)


@pytest.mark.unit
def test_search_defaults_are_filled():
    args = validate("godsaeng_search_spot", {"purpose": "study", "location": "강남역"})
    assert isinstance(args, SearchSpotInput)
    assert args.radius == 500
    assert args.limit == 5
    assert args.response_format == "markdown"
    assert args.keyword is None


@pytest.mark.unit
def test_search_in_range_values_are_kept():
    args = validate(
        "godsaeng_search_spot",
        {"purpose": "work", "location": "서울시청", "radius": 20000, "limit": 15, "response_format": "json"},
    )
    assert args.radius == 20000
    assert args.limit == 15
    assert args.response_format == "json"


@pytest.mark.unit
def test_strings_are_trimmed():
    args = validate("godsaeng_search_spot", {"purpose": "study", "location": "  강남역  "})
    assert args.location == "강남역"


@pytest.mark.unit
def test_blank_location_is_rejected():
    result = validate("godsaeng_search_spot", {"purpose": "study", "location": "   "})
    assert isinstance(result, DomainError)
    assert result.kind is ErrorKind.VALIDATION_FAILED
    assert "location" in result.message


@pytest.mark.unit
def test_unknown_fields_are_rejected():
    result = validate("godsaeng_search_spot", {"purpose": "study", "location": "강남역", "page": 2})
    assert isinstance(result, DomainError)
    assert "page" in result.message


@pytest.mark.unit
def test_errors_are_aggregated_into_one_message():
    result = validate("godsaeng_search_spot", {"purpose": "sleep", "location": "강남역", "radius": 50, "limit": 99})
    assert isinstance(result, DomainError)
    for field in ("purpose", "radius", "limit"):
        assert f"{field}:" in result.detail
    assert result.detail.count(";") == 2


@pytest.mark.unit
@pytest.mark.parametrize("duration", [14, 481, 500])
def test_duration_out_of_range_fails(duration):
    result = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": "2026-01-15T19:00:00", "duration_minutes": duration},
    )
    assert isinstance(result, DomainError)
    assert "duration_minutes" in result.message


@pytest.mark.unit
def test_block_session_defaults():
    args = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": "2026-01-15T19:00", "duration_minutes": 120},
    )
    assert isinstance(args, BlockSessionInput)
    assert args.reminder_minutes == 15
    assert args.color == "BLUE"


@pytest.mark.unit
@pytest.mark.parametrize(
    "start_time",
    ["2026-01-15T19:00:00", "2026-01-15T19:00", "2026-01-15T10:00:00Z", "2026-01-15T19:00:00+09:00"],
)
def test_accepted_start_time_forms(start_time):
    args = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": start_time, "duration_minutes": 60},
    )
    assert isinstance(args, BlockSessionInput)


@pytest.mark.unit
@pytest.mark.parametrize("start_time", ["2026-01-15 19:00", "tomorrow 7pm", "2026-13-45T25:00"])
def test_rejected_start_time_forms(start_time):
    result = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": start_time, "duration_minutes": 60},
    )
    assert isinstance(result, DomainError)
    assert "start_time" in result.message


@pytest.mark.unit
def test_title_length_ceiling():
    result = validate(
        "godsaeng_block_session",
        {"title": "x" * 51, "start_time": "2026-01-15T19:00", "duration_minutes": 60},
    )
    assert isinstance(result, DomainError)


@pytest.mark.unit
def test_color_must_be_known():
    result = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": "2026-01-15T19:00", "duration_minutes": 60, "color": "BLACK"},
    )
    assert isinstance(result, DomainError)
    assert "color" in result.message


@pytest.mark.unit
def test_location_url_is_kept_verbatim():
    url = "https://place.map.kakao.com/12345"
    args = validate("godsaeng_send_commitment", {"goal": "공부 2시간", "location_url": url})
    assert isinstance(args, SendCommitmentInput)
    assert args.location_url == url
    assert args.template_type == "feed"


@pytest.mark.unit
def test_location_url_must_be_a_url():
    result = validate("godsaeng_send_commitment", {"goal": "공부", "location_url": "not a url"})
    assert isinstance(result, DomainError)
    assert "Invalid URL format" in result.message


@pytest.mark.unit
def test_unknown_tool():
    result = validate("godsaeng_sleep", {})
    assert isinstance(result, DomainError)
    assert result.kind is ErrorKind.UNKNOWN_TOOL


@pytest.mark.unit
def test_non_mapping_arguments_are_rejected():
    result = validate("godsaeng_send_commitment", ["goal"])
    assert isinstance(result, DomainError)
    assert result.kind is ErrorKind.VALIDATION_FAILED


@pytest.mark.unit
def test_published_schema_is_closed():
    schema = SearchSpotInput.model_json_schema()
    assert schema["additionalProperties"] is False
    assert set(schema["required"]) == {"purpose", "location"}


@pytest.mark.unit
@pytest.mark.parametrize("field, value", [
    ("radius", "1000"),
    ("radius", 1000.5),
    ("limit", True),
    ("limit", "3"),
])
def test_numbers_are_not_coerced(field, value):
    result = validate(
        "godsaeng_search_spot",
        {"purpose": "study", "location": "강남역", field: value},
    )
    assert isinstance(result, DomainError)
    assert result.kind is ErrorKind.VALIDATION_FAILED
    assert field in result.message


@pytest.mark.unit
def test_booleans_are_not_durations():
    result = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": "2026-01-15T19:00:00", "duration_minutes": 60, "reminder_minutes": False},
    )
    assert isinstance(result, DomainError)
    assert "reminder_minutes" in result.message


@pytest.mark.unit
@pytest.mark.parametrize("start_time", [
    "9999-12-31T23:00:00",
    "9999-12-31T20:00:00Z",
    "0001-01-01T00:00:00+05:00",
])
def test_start_time_outside_the_calendar_range(start_time):
    result = validate(
        "godsaeng_block_session",
        {"title": "공부", "start_time": start_time, "duration_minutes": 480},
    )
    assert isinstance(result, DomainError)
    assert result.kind is ErrorKind.VALIDATION_FAILED
    assert "start_time: start_time is out of the supported date range" in result.message
