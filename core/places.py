# =============================================================================
# core/places.py  —  Place-search adapter (Kakao Local API)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Finds productivity spots (study cafes, gyms, book cafes, coworking
#   spaces) around a free-text location.
#
# THE FLOW:
#   1. Resolve the location string to coordinates.  The exact address
#      lookup is tried first.  Landmarks like "홍대입구역" are not
#      addresses, so if that finds nothing we take the first keyword hit.
#   2. Pick the search phrase: the caller's keyword, or the purpose default.
#   3. Run a distance-sorted keyword search around those coordinates,
#      filtered by category group when the purpose has one.
#   4. Trim each raw Kakao document down to a Place.
# =============================================================================

import logging
from typing import Optional, Union

import httpx

from core.config import Settings
from core.constants import (
    KAKAO_ADDRESS_SEARCH_URL,
    KAKAO_KEYWORD_SEARCH_URL,
    PURPOSES,
    UNAVAILABLE,
)
from core.errors import (
    DomainError,
    config_missing,
    not_found,
    provider_error,
    rate_limited,
    unauthorized,
)
from core.http_client import client_scope, json_body, kakao_ak_headers, send
from core.models import Coordinates, Place, SearchSpotResult
from core.schemas import SearchSpotInput


logger = logging.getLogger(__name__)

SEARCH_ACTION = "장소 검색"
API_KEY_MISSING_MESSAGE = "KAKAO_REST_API_KEY가 설정되지 않았습니다. 서버 설정을 확인해주세요."
API_KEY_REJECTED_MESSAGE = "Kakao API 인증 실패. API Key를 확인해주세요."


def _classify(response: httpx.Response) -> Optional[DomainError]:
    """Map a non-2xx Local API response to a DomainError (None on success)."""
    if response.is_success:
        return None
    if response.status_code == 401:
        return unauthorized(API_KEY_REJECTED_MESSAGE)
    if response.status_code == 429:
        return rate_limited()
    return provider_error(SEARCH_ACTION, status=response.status_code)


def _get_documents(
    client: httpx.Client,
    url: str,
    api_key: str,
    params: dict,
) -> Union[list, DomainError]:
    response = send(
        client,
        "GET",
        url,
        SEARCH_ACTION,
        headers=kakao_ak_headers(api_key),
        params=params,
    )
    if isinstance(response, DomainError):
        return response
    error = _classify(response)
    if error is not None:
        return error
    documents = json_body(response).get("documents")
    return documents if isinstance(documents, list) else []


def get_coordinates(
    location: str,
    api_key: str,
    client: httpx.Client,
) -> Union[Coordinates, DomainError]:
    """Resolve a location string to coordinates (address first, then keyword)."""
    documents = _get_documents(client, KAKAO_ADDRESS_SEARCH_URL, api_key, {"query": location})
    if isinstance(documents, DomainError):
        return documents
    if documents:
        first = documents[0]
        return Coordinates(latitude=str(first.get("y", "")), longitude=str(first.get("x", "")))

    logger.info(f"No address match for {location!r}; trying keyword lookup")
    documents = _get_documents(
        client, KAKAO_KEYWORD_SEARCH_URL, api_key, {"query": location, "size": 1}
    )
    if isinstance(documents, DomainError):
        return documents
    if documents:
        first = documents[0]
        return Coordinates(latitude=str(first.get("y", "")), longitude=str(first.get("x", "")))

    return not_found(location)


def build_query(purpose: str, location: str, keyword: Optional[str] = None) -> str:
    """`"{location} {keyword or purpose default}"`."""
    phrase = keyword or PURPOSES[purpose].default_keyword
    return f"{location} {phrase}"


def process_place(document: dict) -> Place:
    """Trim a raw Kakao place document to the fields we expose."""
    address = document.get("address_name") or ""
    distance = document.get("distance")
    return Place(
        name=document.get("place_name", ""),
        address=address,
        road_address=document.get("road_address_name") or address,
        phone=document.get("phone") or UNAVAILABLE,
        category=document.get("category_name", ""),
        distance=f"{distance}m" if distance else UNAVAILABLE,
        map_url=document.get("place_url", ""),
        coordinates=Coordinates(
            latitude=str(document.get("y", "")),
            longitude=str(document.get("x", "")),
        ),
    )


def search_spots(
    args: SearchSpotInput,
    settings: Settings,
    client: Optional[httpx.Client] = None,
) -> Union[SearchSpotResult, DomainError]:
    """Run the full place search for one validated request."""
    if not settings.has_rest_api_key:
        return config_missing(API_KEY_MISSING_MESSAGE)

    purpose = PURPOSES[args.purpose]
    query = build_query(args.purpose, args.location, args.keyword)

    with client_scope(client) as http:
        coords = get_coordinates(args.location, settings.kakao_rest_api_key, http)
        if isinstance(coords, DomainError):
            return coords

        params = {
            "query": query,
            "x": coords.longitude,
            "y": coords.latitude,
            "radius": args.radius,
            "size": args.limit,
            "sort": "distance",
        }
        if purpose.category_code:
            params["category_group_code"] = purpose.category_code

        logger.info(f"Searching {query!r} within {args.radius}m (limit {args.limit})")
        documents = _get_documents(http, KAKAO_KEYWORD_SEARCH_URL, settings.kakao_rest_api_key, params)

    if isinstance(documents, DomainError):
        return documents

    places = [process_place(doc) for doc in documents]
    return SearchSpotResult(
        query=query,
        purpose=args.purpose,
        location=args.location,
        total=len(places),
        places=places,
    )
