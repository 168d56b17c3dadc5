# =============================================================================
# core/http_client.py  —  Outbound HTTP policy shared by all adapters
# =============================================================================
#
# Every Kakao call goes through an httpx.Client built here, so all three
# adapters have the same timeout and the same retry policy, which is none.
# A transient failure is surfaced to the caller as-is.
#
# Tests pass their own client (usually one wrapping httpx.MockTransport),
# which is why every adapter accepts an optional `client` argument.
# =============================================================================

from contextlib import contextmanager
import logging
from typing import Iterator, Optional, Union

import httpx

from core.constants import REQUEST_TIMEOUT_SECONDS
from core.errors import DomainError, provider_error, timed_out


logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=utf-8"


def build_client(
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the client used for one tool call."""
    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        transport=transport,
        headers={"Accept": "application/json"},
    )


@contextmanager
def client_scope(client: Optional[httpx.Client]) -> Iterator[httpx.Client]:
    """Yield the injected client, or a fresh one that is closed afterwards."""
    if client is not None:
        yield client
        return
    owned = build_client()
    try:
        yield owned
    finally:
        owned.close()


def kakao_ak_headers(api_key: str) -> dict[str, str]:
    return {"Authorization": f"KakaoAK {api_key}"}


def bearer_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": FORM_CONTENT_TYPE,
    }


def send(
    client: httpx.Client,
    method: str,
    url: str,
    action: str,
    **kwargs,
) -> Union[httpx.Response, DomainError]:
    """Perform one request; transport failures become DomainErrors.

    HTTP error statuses are returned as ordinary responses.  Each adapter
    maps them itself, since the mapping differs per provider.
    """
    try:
        return client.request(method, url, **kwargs)
    except httpx.TimeoutException:
        logger.warning(f"{action}: request to {url} timed out")
        seconds = REQUEST_TIMEOUT_SECONDS
        if isinstance(client.timeout, httpx.Timeout) and client.timeout.read is not None:
            seconds = client.timeout.read
        return timed_out(action, seconds)
    except httpx.HTTPError as exc:
        logger.warning(f"{action}: request to {url} failed: {exc.__class__.__name__}")
        return provider_error(action, detail="네트워크 오류가 발생했습니다.")


def json_body(response: httpx.Response) -> dict:
    """Decode a JSON object body, tolerating empty or non-JSON payloads."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
