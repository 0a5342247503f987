"""tests/bnvd_client/conftest.py

Common fixtures for the entire test suite.
"""

import json

import httpx
import pytest
from typer.testing import CliRunner

BASE_URL = "http://bnvd.test"


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep BNVD_* variables from the developer's shell out of the tests."""
    for name in ("BNVD_BASE_URL", "BNVD_TIMEOUT_SECONDS", "BNVD_HEADERS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Every request that reaches the transport is appended to `add_response.calls`.
    """
    responses = {}
    calls_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json_payload: object | None = None,
        text: str | None = None,
        exc: type[httpx.HTTPError] | None = None,
    ):
        """Register a mock response (or a transport exception) for a given URL and method."""
        if json_payload is not None:
            body = json.dumps(json_payload).encode("utf-8")
        else:
            body = (text or "").encode("utf-8")
        responses[(method.upper(), url)] = (status_code, body, exc)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        calls_log.append(request)
        key = (request.method, str(request.url))
        if key in responses:
            status, body, exc = responses[key]
            if exc is not None:
                raise exc("Simulated transport failure", request=request)
            headers = {"Content-Length": str(len(body))}
            return httpx.Response(status, content=body, headers=headers)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response
