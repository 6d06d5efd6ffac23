"""ジオコーディングサービス"""

from typing import Optional

from tqdm import tqdm

from ....infrastructure.config.settings import Settings
from ....infrastructure.gcp.secret_manager import resolve_api_key
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ....shared.utils.text import remove_whitespace
from ...storage.clients.firestore_client import FirestoreClient
from ..domain.models import AddressRecord
from ..providers.cache_stores import CacheStore, FirestoreCacheStore, InMemoryCacheStore
from ..providers.google_geocoder import GoogleGeocoder
from ..providers.request_builder import RequestBuilder

logger = get_logger(__name__)


class GeocodingService:
    """
    ジオコーディングサービス

    APIキーや言語などの共通設定を持ったビルダーから、
    住所・Place ID・郵便番号ごとのクエリを組み立てて GoogleGeocoder に渡す。
    """

    def __init__(
        self,
        geocoder: GoogleGeocoder,
        base_builder: RequestBuilder,
        use_cache: bool = True,
    ) -> None:
        """
        Args:
            geocoder: GoogleGeocoder
            base_builder: APIキー等を設定済みのビルダー
            use_cache: キャッシュから読み込むか
        """
        self.geocoder = geocoder
        self.base_builder = base_builder if use_cache else base_builder.disable_cache()

        logger.info(f"GeocodingService initialized: cache={use_cache}")

    def geocode_address(
        self, address: str, country: Optional[str] = None
    ) -> Optional[AddressRecord]:
        """
        住所をジオコーディング

        Args:
            address: 住所文字列
            country: 国コードで絞り込む場合に指定

        Returns:
            Optional[AddressRecord]: 住所情報（見つからない場合はNone）
        """
        if not address:
            logger.warning("Empty address provided for geocoding")
            return None

        builder = self.base_builder.address(address)
        if country:
            builder = builder.country(country)

        return self._fetch(builder, address)

    def geocode_place_id(self, place_id: str) -> Optional[AddressRecord]:
        """Place IDから住所を取得"""
        if not place_id:
            logger.warning("Empty place_id provided for geocoding")
            return None

        return self._fetch(self.base_builder.place_id(place_id), place_id)

    def geocode_postal_code(self, postal_code: str, country: str) -> Optional[AddressRecord]:
        """
        郵便番号をジオコーディング

        国の指定がない場合、または郵便番号が数字とハイフン以外を含む場合は
        郵便番号を送信できないためNoneを返す（リクエストは行わない）。
        """
        if not country:
            logger.warning(f"Country is required to geocode postal code: {postal_code!r}")
            return None

        normalized = remove_whitespace(postal_code)
        if not RequestBuilder.is_postal_code(normalized):
            logger.warning(f"Postal code cannot be used in a query: {postal_code!r}")
            return None

        builder = self.base_builder.country(country).postal_code(postal_code)
        return self._fetch(builder, f"{postal_code} ({country})")

    def geocode_addresses(
        self, addresses: list[str], show_progress: bool = True
    ) -> dict[str, Optional[AddressRecord]]:
        """
        複数の住所を順番にジオコーディング

        Args:
            addresses: 住所のリスト（重複は1回のみ処理）
            show_progress: プログレスバーを表示するか

        Returns:
            dict[str, Optional[AddressRecord]]: 住所ごとの結果
        """
        unique_addresses = list(dict.fromkeys(address for address in addresses if address))
        logger.info(f"Starting batch geocoding: {len(unique_addresses)} addresses")

        iterator = tqdm(unique_addresses, desc="geocoding") if show_progress else unique_addresses

        results: dict[str, Optional[AddressRecord]] = {}
        for address in iterator:
            results[address] = self.geocode_address(address)

        success_count = sum(1 for record in results.values() if record is not None)
        logger.info(
            f"Batch geocoding completed: {success_count} success, "
            f"{len(results) - success_count} failure"
        )

        return results

    def _fetch(self, builder: RequestBuilder, label: str) -> Optional[AddressRecord]:
        record = self.geocoder.fetch(builder)
        if record is None:
            logger.warning(f"Failed to geocode: {label}")
        else:
            logger.debug(f"Geocoded: {label} -> ({record.lat}, {record.lng})")
        return record


def create_cache_store(settings: Settings) -> CacheStore:
    """設定に応じたキャッシュストアを作成"""
    if settings.geocoding_cache_backend == "firestore":
        firestore_client = FirestoreClient(
            project_id=settings.gcp_project_id,
            database_id=settings.firestore_database_id,
        )
        return FirestoreCacheStore(
            firestore_client, collection=settings.firestore_cache_collection
        )

    return InMemoryCacheStore()


def create_geocoding_service(
    settings: Settings,
    transport: Optional[HTTPClient] = None,
    cache: Optional[CacheStore] = None,
) -> GeocodingService:
    """
    設定からGeocodingServiceを組み立てる

    Args:
        settings: アプリケーション設定
        transport: HTTPクライアント（省略時は設定から作成）
        cache: キャッシュストア（省略時は設定から作成）

    Raises:
        ConfigurationError: APIキーを解決できない場合
    """
    api_key = resolve_api_key(settings)

    if transport is None:
        transport = HTTPClient(
            timeout=settings.http_timeout,
            user_agent=settings.http_user_agent,
        )
    if cache is None:
        cache = create_cache_store(settings)

    builder = (
        RequestBuilder()
        .api_key(api_key)
        .endpoint(settings.geocoding_endpoint)
        .cache_seconds(settings.geocoding_cache_seconds)
    )
    if settings.geocoding_language:
        builder = builder.language(settings.geocoding_language)
    if settings.geocoding_region:
        builder = builder.region(settings.geocoding_region)

    return GeocodingService(
        geocoder=GoogleGeocoder(transport, cache=cache),
        base_builder=builder,
        use_cache=settings.geocoding_cache_enabled,
    )
