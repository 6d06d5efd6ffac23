"""Geocoding APIレスポンスの正規化"""
import json
from typing import Optional, Union

from pydantic import ValidationError

from ....shared.exceptions.errors import MalformedResponseError
from ....shared.logging.config import get_logger
from ....shared.utils.text import mask_api_key
from ..domain.models import AddressRecord
from ..domain.schemas import AddressComponent, GeocodeResponse, GeocodeResult

logger = get_logger(__name__)


class ResponseNormalizer:
    """
    Geocoding APIのレスポンスを AddressRecord に変換

    最初の検索結果のみを使用する。以下はすべて「結果なし」(None) として扱う:
    - JSONとして解析できない
    - resultsが空（ZERO_RESULTS のほか OVER_QUERY_LIMIT, REQUEST_DENIED も含む）
    - 座標 (geometry.location) が欠けている
    """

    def parse(self, raw_body: Union[str, bytes]) -> GeocodeResponse:
        """
        レスポンス本文を解析

        statusやerror_messageを確認したい場合に使う。

        Raises:
            MalformedResponseError: JSONとして解析できない、または構造が不正な場合
        """
        try:
            data = json.loads(raw_body)
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Response body must be a JSON object, got {type(data).__name__}"
            )

        try:
            return GeocodeResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected response structure: {e}") from e

    def normalize(self, raw_body: Union[str, bytes], url: str) -> Optional[AddressRecord]:
        """
        レスポンス本文を正規化

        Args:
            raw_body: レスポンス本文
            url: リクエストURL（レコードにそのまま保存）

        Returns:
            Optional[AddressRecord]: 住所情報（結果がない場合はNone）
        """
        try:
            response = self.parse(raw_body)
        except MalformedResponseError as e:
            logger.warning(f"Malformed geocoding response for {mask_api_key(url)}: {e}")
            return None

        if not response.results:
            # OVER_QUERY_LIMIT => You have exceeded your daily request quota for this API.
            # REQUEST_DENIED => This API project is not authorized to use this API.
            logger.info(
                f"No geocoding results for {mask_api_key(url)} "
                f"(status={response.status}, error_message={response.error_message})"
            )
            return None

        try:
            result = GeocodeResult.model_validate(response.results[0])
        except ValidationError as e:
            logger.warning(f"Malformed geocoding result for {mask_api_key(url)}: {e}")
            return None

        return self.to_record(result, url)

    def to_record(self, result: GeocodeResult, url: str) -> Optional[AddressRecord]:
        """検索結果1件を AddressRecord に変換"""
        location = result.location()
        if location is None:
            logger.warning(f"Invalid geocoding result (missing lat/lng): {mask_api_key(url)}")
            return None

        components = result.address_components
        street_number = self.get_address_component(components, "street_number") or ""
        route = self.get_address_component(components, "route") or ""

        return AddressRecord(
            place_id=result.place_id,
            lat=location.lat,
            lng=location.lng,
            address=f"{street_number} {route}".strip(),
            country=self.get_address_component(components, "country", short=True),
            country_long=self.get_address_component(components, "country", short=False),
            postal_code=self.get_address_component(components, "postal_code"),
            neighborhood=self.get_address_component(components, "neighborhood"),
            sublocality=self.get_address_component(components, "sublocality"),
            locality=self.get_address_component(components, "locality"),
            administrative_area_level_1=self.get_address_component(
                components, "administrative_area_level_1", short=False
            ),
            administrative_area_level_2=self.get_address_component(
                components, "administrative_area_level_2", short=False
            ),
            administrative_area_level_3=self.get_address_component(
                components, "administrative_area_level_3", short=False
            ),
            geometry=result.geometry or {},
            type=result.first_type,
            url=url,
        )

    @staticmethod
    def get_address_component(
        components: list[AddressComponent], type_name: str, short: bool = True
    ) -> Optional[str]:
        """
        指定タイプを持つ最初のコンポーネントの名前を取得

        https://developers.google.com/maps/documentation/geocoding/requests-geocoding#Types

        Args:
            components: address_components（APIの順序のまま）
            type_name: タイプ名（例: locality）
            short: Trueならshort_name、Falseならlong_name

        Returns:
            Optional[str]: 名前（該当なしはNone）
        """
        for component in components:
            if type_name in component.types:
                return component.short_name if short else component.long_name
        return None
