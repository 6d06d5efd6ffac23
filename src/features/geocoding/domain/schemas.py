"""Geocoding APIレスポンスのスキーマ

https://developers.google.com/maps/documentation/geocoding/requests-geocoding#GeocodingResponses
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class Location(BaseModel):
    """geometry.location"""

    lat: float
    lng: float


class AddressComponent(BaseModel):
    """address_componentsの1要素"""

    model_config = ConfigDict(extra="ignore")

    types: list[str] = Field(default_factory=list)
    short_name: Optional[str] = None
    long_name: Optional[str] = None


class GeocodeResult(BaseModel):
    """resultsの1要素"""

    model_config = ConfigDict(extra="ignore")

    place_id: Optional[str] = None
    geometry: Optional[dict[str, Any]] = None
    address_components: list[AddressComponent] = Field(default_factory=list)
    types: Optional[list[str]] = None

    @field_validator("types", mode="before")
    @classmethod
    def _drop_non_list_types(cls, value: Any) -> Any:
        # 配列でなければ「タイプなし」として扱う
        return value if isinstance(value, list) else None

    @property
    def first_type(self) -> str:
        """最初の結果タイプ（なければ空文字）"""
        if self.types:
            return self.types[0]
        return ""

    def location(self) -> Optional[Location]:
        """geometry.locationを取得（欠けている・数値でない場合はNone）"""
        if not self.geometry:
            return None
        try:
            return Location.model_validate(self.geometry.get("location"))
        except ValidationError:
            return None


class GeocodeResponse(BaseModel):
    """
    Geocoding APIのレスポンス全体

    statusとerror_messageは正規化には使わない（呼び出し側の参考情報）。
    例: OVER_QUERY_LIMIT, REQUEST_DENIED, ZERO_RESULTS
    """

    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    error_message: Optional[str] = None
    # 要素は未検証。先頭の1件のみ GeocodeResult として検証する
    results: list[Any] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
