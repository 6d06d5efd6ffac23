"""ジオコーディング機能のドメインモデル"""
import hashlib
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

# Geocoding APIのエンドポイント
GEOCODE_API_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"

# キャッシュキーのフォーマット（%sにURLのSHA-1を埋め込む）
GEOCODE_CACHE_KEY = "googleapis-geocode-%s"

# キャッシュのデフォルト有効期間: 24時間
DEFAULT_CACHE_SECONDS = 86400


@dataclass(frozen=True)
class GeocodeQuery:
    """
    ジオコーディングのリクエスト条件

    すべての項目は任意。APIキーだけのクエリも有効なリクエストとして扱う
    （使えるクエリかどうかの判断は呼び出し側の責務）。
    """

    api_key: str = ""
    address: Optional[str] = None  # 住所（フリーテキスト）
    place_id: Optional[str] = None  # Google Maps Place ID
    postal_code: Optional[str] = None  # 郵便番号（countryと併用時のみ送信）
    country: Optional[str] = None  # 国コード（components=country:xx）
    language: Optional[str] = None  # レスポンスの言語
    region: Optional[str] = None  # 地域バイアス（ccTLD）
    use_cache: bool = True  # キャッシュから読み込むか
    cache_seconds: int = DEFAULT_CACHE_SECONDS  # キャッシュの有効期間（秒）
    endpoint: str = GEOCODE_API_ENDPOINT


def make_cache_key(url: str) -> str:
    """リクエストURLからキャッシュキーを生成"""
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
    return GEOCODE_CACHE_KEY % digest


@dataclass(frozen=True)
class AddressRecord:
    """正規化された住所情報（最初の検索結果から生成）"""

    place_id: Optional[str]
    lat: float  # 緯度
    lng: float  # 経度
    address: str  # 番地 + 通り名
    country: Optional[str]  # 国（短縮形 例: JP）
    country_long: Optional[str]  # 国（正式名 例: Japan）
    postal_code: Optional[str] = None
    neighborhood: Optional[str] = None
    sublocality: Optional[str] = None
    locality: Optional[str] = None  # 市区町村
    administrative_area_level_1: Optional[str] = None  # 都道府県・州
    administrative_area_level_2: Optional[str] = None
    administrative_area_level_3: Optional[str] = None
    geometry: dict[str, Any] = field(default_factory=dict)  # APIのgeometryをそのまま保持
    type: str = ""  # 最初の結果タイプ（例: street_address）
    url: str = ""  # この結果を取得したリクエストURL

    def __repr__(self) -> str:
        return f"AddressRecord(place_id={self.place_id}, lat={self.lat}, lng={self.lng})"

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.lat, self.lng)

    def to_dict(self) -> dict[str, Any]:
        """キャッシュ保存用の辞書に変換"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AddressRecord":
        """キャッシュから読み込んだ辞書を復元"""
        return cls(
            place_id=data.get("place_id"),
            lat=float(data["lat"]),
            lng=float(data["lng"]),
            address=data.get("address") or "",
            country=data.get("country"),
            country_long=data.get("country_long"),
            postal_code=data.get("postal_code"),
            neighborhood=data.get("neighborhood"),
            sublocality=data.get("sublocality"),
            locality=data.get("locality"),
            administrative_area_level_1=data.get("administrative_area_level_1"),
            administrative_area_level_2=data.get("administrative_area_level_2"),
            administrative_area_level_3=data.get("administrative_area_level_3"),
            geometry=data.get("geometry") or {},
            type=data.get("type") or "",
            url=data.get("url") or "",
        )
