"""共通フィクスチャ"""

import json
from typing import Any, Optional

import pytest

from src.infrastructure.config.settings import Settings


class FakeResponse:
    """requests.Responseの代わり（textのみ）"""

    def __init__(self, text: str) -> None:
        self.text = text


class FakeTransport:
    """リクエストURLを記録し、固定のレスポンスを返すトランスポート"""

    def __init__(self, body: str) -> None:
        self.body = body
        self.requested_urls: list[str] = []

    def get(self, url: str) -> FakeResponse:
        self.requested_urls.append(url)
        return FakeResponse(self.body)


class FakeCache:
    """TTLも記録する辞書ベースのキャッシュ"""

    def __init__(self) -> None:
        self.entries: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> Optional[Any]:
        return self.entries.get(key)

    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        self.entries[key] = value
        self.ttls[key] = ttl_seconds


def make_result(
    components: Optional[list[dict[str, Any]]] = None,
    types: Any = ("street_address",),
    lat: float = 37.7749,
    lng: float = -122.4194,
) -> dict[str, Any]:
    """Geocoding APIの結果1件を作成"""
    result: dict[str, Any] = {
        "place_id": "ChIJK8bObYYvBEgRcLIJHlI3DQQ",
        "geometry": {
            "location": {"lat": lat, "lng": lng},
            "location_type": "ROOFTOP",
            "viewport": {
                "northeast": {"lat": lat + 0.001, "lng": lng + 0.001},
                "southwest": {"lat": lat - 0.001, "lng": lng - 0.001},
            },
        },
        "address_components": components if components is not None else [],
    }
    if types is not None:
        result["types"] = list(types) if isinstance(types, tuple) else types
    return result


def make_body(results: list[dict[str, Any]], status: str = "OK", **extra: Any) -> str:
    """レスポンス本文(JSON)を作成"""
    return json.dumps({"results": results, "status": status, **extra})


FULL_COMPONENTS = [
    {"types": ["street_number"], "short_name": "123", "long_name": "123"},
    {"types": ["route"], "short_name": "Main St", "long_name": "Main Street"},
    {"types": ["neighborhood", "political"], "short_name": "SoMa", "long_name": "South of Market"},
    {"types": ["sublocality", "political"], "short_name": "Downtown", "long_name": "Downtown SF"},
    {"types": ["locality", "political"], "short_name": "SF", "long_name": "San Francisco"},
    {
        "types": ["administrative_area_level_3", "political"],
        "short_name": "Area3",
        "long_name": "Area Level Three",
    },
    {
        "types": ["administrative_area_level_2", "political"],
        "short_name": "SF County",
        "long_name": "San Francisco County",
    },
    {
        "types": ["administrative_area_level_1", "political"],
        "short_name": "CA",
        "long_name": "California",
    },
    {"types": ["country", "political"], "short_name": "US", "long_name": "United States"},
    {"types": ["postal_code"], "short_name": "94103", "long_name": "94103"},
]


@pytest.fixture
def full_body() -> str:
    """全コンポーネントを含むレスポンス"""
    return make_body([make_result(FULL_COMPONENTS)])


@pytest.fixture
def transport(full_body: str) -> FakeTransport:
    return FakeTransport(full_body)


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture(name="make_result")
def make_result_fixture():
    return make_result


@pytest.fixture(name="make_body")
def make_body_fixture():
    return make_body


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settingsが読む環境変数を除去（実行環境の影響を受けないように）"""
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
