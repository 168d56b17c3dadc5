import httpx
import pytest

from core.config import Settings


class KakaoStub:
    """Routes requests by URL path to canned responses and records them."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "no stub"})
        if callable(route):
            return route(request)
        responses = route if isinstance(route, list) else [route]
        # Lists are consumed in order; the last entry repeats.
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        status, body = response
        return httpx.Response(status, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler), timeout=10.0)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def settings():
    return Settings(kakao_rest_api_key="rest-key", kakao_access_token="access-token")


@pytest.fixture
def no_credentials():
    return Settings()


@pytest.fixture
def kakao():
    return KakaoStub()
