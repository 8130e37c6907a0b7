import httpx
import pytest

ENDPOINT = "http://clickhouse.test:8123"


@pytest.fixture
def endpoint():
    return ENDPOINT


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def reply(recorded_requests):
    """Build a MockTransport that records each request and answers with the given body."""
    def factory(body="", status_code=200, headers=None):
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return httpx.Response(status_code, text=body, headers=headers)
        return httpx.MockTransport(handler)
    return factory


@pytest.fixture
def failing():
    """Build a MockTransport whose every request raises the given httpx exception class."""
    def factory(exc_class, message="boom"):
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_class(message, request=request)
        return httpx.MockTransport(handler)
    return factory
