"""Geocoding APIのリクエストURL生成"""
import re
from dataclasses import replace
from typing import Any, Optional
from urllib.parse import quote_plus

from ....shared.exceptions.errors import ValidationError
from ....shared.utils.text import remove_whitespace
from ..domain.models import GeocodeQuery

_POSTAL_CODE_PATTERN = re.compile(r"^[0-9\-]+$")


def is_postal_code(postal_code: str) -> bool:
    """
    郵便番号として送信できる形式か（数字とハイフンのみ）

    空白は呼び出し側で除去しておくこと。
    """
    return bool(_POSTAL_CODE_PATTERN.match(postal_code))


def normalize_region(region: str) -> str:
    """
    regionパラメータを正規化

    英国のccTLDは "uk" (.co.uk) だが、ISO 3166-1 コードは "gb" のため変換する。
    """
    region = region.lower()
    if region == "gb":
        return "uk"
    return region


def build_request_url(query: GeocodeQuery) -> str:
    """
    クエリからリクエストURLを生成

    パラメータの順序はキャッシュキーに影響するため固定。
    https://developers.google.com/maps/documentation/geocoding/requests-geocoding
    """
    url = f"{query.endpoint}?key={query.api_key}"

    # place_idはエンコードせずにそのまま付与
    if query.place_id:
        url += f"&place_id={query.place_id}"

    if query.address:
        url += f"&address={quote_plus(query.address)}"

    if query.language:
        url += f"&language={query.language}"

    if query.region:
        url += f"&region={normalize_region(query.region)}"

    if query.country:
        url += f"&components=country:{query.country.lower()}"

        if query.postal_code:
            postal_code = remove_whitespace(query.postal_code)
            if is_postal_code(postal_code):
                url += f"|postal_code:{quote_plus(postal_code)}"

    return url


def _require(value: Any, expected: type, name: str) -> None:
    # boolはintのサブクラスなので明示的に除外
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValidationError(
            f"{name} must be {expected.__name__}, got {type(value).__name__}"
        )


class RequestBuilder:
    """
    GeocodeQueryを組み立てるビルダー

    各セッターは型のみを検証し、新しいビルダーを返す（元のビルダーは変更しない）。

    Example:
        >>> builder = RequestBuilder().api_key("KEY").address("1600 Amphitheatre Pkwy")
        >>> builder.region("GB").build_url()
    """

    def __init__(self, query: Optional[GeocodeQuery] = None) -> None:
        self._query = query or GeocodeQuery()

    def _with(self, **changes: Any) -> "RequestBuilder":
        return RequestBuilder(replace(self._query, **changes))

    def api_key(self, api_key: str) -> "RequestBuilder":
        _require(api_key, str, "api_key")
        return self._with(api_key=api_key)

    def address(self, address: str) -> "RequestBuilder":
        _require(address, str, "address")
        return self._with(address=address)

    def place_id(self, place_id: str) -> "RequestBuilder":
        """
        Place IDから住所を取得

        https://developers.google.com/maps/documentation/geocoding/requests-places-geocoding
        """
        _require(place_id, str, "place_id")
        return self._with(place_id=place_id)

    def postal_code(self, postal_code: str) -> "RequestBuilder":
        _require(postal_code, str, "postal_code")
        return self._with(postal_code=postal_code)

    def language(self, language: str) -> "RequestBuilder":
        """レスポンスの言語 (https://developers.google.com/maps/faq#languagesupport)"""
        _require(language, str, "language")
        return self._with(language=language)

    def region(self, region: str) -> "RequestBuilder":
        """結果を特定地域に寄せるための地域バイアス（ccTLD）"""
        _require(region, str, "region")
        return self._with(region=normalize_region(region))

    def country(self, country: str) -> "RequestBuilder":
        _require(country, str, "country")
        return self._with(country=country)

    def cache_seconds(self, seconds: int) -> "RequestBuilder":
        _require(seconds, int, "cache_seconds")
        return self._with(cache_seconds=seconds)

    def disable_cache(self) -> "RequestBuilder":
        """キャッシュからの読み込みを無効化（書き込みは行われる）"""
        return self._with(use_cache=False)

    def endpoint(self, endpoint: str) -> "RequestBuilder":
        _require(endpoint, str, "endpoint")
        return self._with(endpoint=endpoint)

    def build(self) -> GeocodeQuery:
        """組み立てたクエリを取得"""
        return self._query

    def build_url(self) -> str:
        """リクエストURLを生成"""
        return build_request_url(self._query)

    @staticmethod
    def is_postal_code(postal_code: str) -> bool:
        return is_postal_code(postal_code)
