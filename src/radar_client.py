from __future__ import annotations

import requests

from src.settings import API_RADAR


class MissingCredentialError(Exception):
    pass


class RadarAPIError(Exception):
    def __init__(self, status: int, body: str):
        super().__init__(f"API request failed: {status} - {body}")
        self.status = status
        self.body = body


class RadarClient:
    """
    Bearer-token client for the Cloudflare Radar REST API.

    fetch() returns the payload's `result` untouched. Non-2xx responses raise
    RadarAPIError; transport failures surface as requests exceptions.
    """

    def __init__(self, token: str, session: requests.Session | None = None, base_url: str = API_RADAR):
        if not token or not token.strip():
            raise MissingCredentialError("Radar API token is empty")
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"Bearer {token.strip()}"}

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def fetch(self, endpoint: str):
        print(f"📡 {endpoint}", flush=True)
        r = self.session.get(self.url_for(endpoint), headers=self.headers)
        status = int(r.status_code)
        if not (200 <= status <= 299):
            raise RadarAPIError(status, r.text)
        payload = r.json()
        return payload.get("result") if isinstance(payload, dict) else None
