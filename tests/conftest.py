import json
from urllib.parse import parse_qs, urlsplit

import pytest


class FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Serves canned Radar responses keyed by endpoint path+query."""

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default if default is not None else FakeResponse(200, {"success": True, "result": []})
        self.calls: list[dict] = []
        self.closed = False

    def get(self, url, headers=None, **kwargs):
        self.calls.append({"url": url, "headers": dict(headers or {})})
        parts = urlsplit(url)
        endpoint = parts.path.split("/radar", 1)[-1]
        if parts.query:
            endpoint = f"{endpoint}?{parts.query}"
        return self.routes.get(endpoint, self.default)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def queries(self) -> list[dict]:
        return [parse_qs(urlsplit(c["url"]).query) for c in self.calls]


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def token_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CF_API_TOKEN", "test-token")
    return "test-token"
