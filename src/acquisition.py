from __future__ import annotations

from src.settings import COUNTRY_CODE, DATE_RANGE, TOP_LIMIT


# (section, leaf, path, uses_limit); the country scope swaps the top-locations leaf.
GLOBAL_PLAN = (
    ("layer7", "timeseries", "/attacks/layer7/timeseries", False),
    ("layer7", "summary", "/attacks/layer7/summary/mitigation_product", False),
    ("layer7", "locations", "/attacks/layer7/top/locations/target", True),
    ("layer3", "timeseries", "/attacks/layer3/timeseries", False),
    ("layer3", "protocol", "/attacks/layer3/summary/protocol", False),
    ("bot", "class", "/http/summary/bot_class", False),
)
COUNTRY_PLAN = (
    ("layer7", "timeseries", "/attacks/layer7/timeseries", False),
    ("layer7", "summary", "/attacks/layer7/summary/mitigation_product", False),
    ("layer7", "sources", "/attacks/layer7/top/locations/origin", True),
    ("layer3", "timeseries", "/attacks/layer3/timeseries", False),
    ("layer3", "protocol", "/attacks/layer3/summary/protocol", False),
    ("bot", "class", "/http/summary/bot_class", False),
)


def build_endpoint(path: str, date_range: str, location: str | None = None, limit: int | None = None) -> str:
    query = f"dateRange={date_range}&format=json"
    if location:
        query += f"&location={location}"
    if limit is not None:
        query += f"&limit={limit}"
    return f"{path}?{query}"


def plan_endpoints(date_range: str = DATE_RANGE, location: str | None = None) -> list[tuple[str, str, str]]:
    """Return (section, leaf, endpoint) in fetch order for one scope."""
    plan = COUNTRY_PLAN if location else GLOBAL_PLAN
    return [
        (section, leaf, build_endpoint(path, date_range, location, TOP_LIMIT if uses_limit else None))
        for section, leaf, path, uses_limit in plan
    ]


def fetch_scope(client, date_range: str = DATE_RANGE, location: str | None = None) -> dict[str, dict]:
    out: dict[str, dict] = {}
    for section, leaf, endpoint in plan_endpoints(date_range, location):
        out.setdefault(section, {})[leaf] = client.fetch(endpoint)
    return out


def fetch_all(client, date_range: str = DATE_RANGE, country: str = COUNTRY_CODE) -> tuple[dict, dict]:
    print("🌍 グローバルデータ取得中...", flush=True)
    global_scope = fetch_scope(client, date_range)

    print("🇯🇵 日本データ取得中...", flush=True)
    country_scope = fetch_scope(client, date_range, location=country)
    return global_scope, country_scope
