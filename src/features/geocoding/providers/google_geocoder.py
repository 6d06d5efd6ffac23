"""Google Geocoding API実装（キャッシュ付き）

Google Geocoding APIの利用制限:
- 無料枠: 24時間あたり2,500リクエスト
- Maps for Business: 24時間あたり100,000リクエスト

https://developers.google.com/maps/documentation/geocoding/
"""
from typing import Any, Optional, Protocol, Union

from ....shared.logging.config import get_logger
from ....shared.utils.text import mask_api_key
from ..domain.models import AddressRecord, GeocodeQuery, make_cache_key
from .cache_stores import CacheStore
from .request_builder import RequestBuilder, build_request_url
from .response_normalizer import ResponseNormalizer

logger = get_logger(__name__)


class HTTPResponse(Protocol):
    text: str


class Transport(Protocol):
    """GETリクエストを送信できるHTTPクライアント（HTTPClient等）"""

    def get(self, url: str) -> HTTPResponse:
        ...


class GoogleGeocoder:
    """
    Google Geocoding APIクライアント

    リクエストURLのハッシュをキーにして結果をキャッシュする。
    - use_cache=False の場合はキャッシュを読まないが、取得結果は書き込む
      （強制的に再取得してキャッシュを更新する動作になる）
    - 結果なし (None) はキャッシュしない
    - トランスポートの例外はそのまま呼び出し側に伝播する
    """

    def __init__(
        self,
        transport: Transport,
        cache: Optional[CacheStore] = None,
        normalizer: Optional[ResponseNormalizer] = None,
    ) -> None:
        """
        Args:
            transport: HTTPクライアント
            cache: キャッシュストア（Noneの場合はキャッシュしない）
            normalizer: レスポンス正規化
        """
        self.transport = transport
        self.cache = cache
        self.normalizer = normalizer or ResponseNormalizer()

        cache_name = type(cache).__name__ if cache is not None else "disabled"
        logger.info(f"GoogleGeocoder initialized: cache={cache_name}")

    def fetch(self, query: Union[GeocodeQuery, RequestBuilder]) -> Optional[AddressRecord]:
        """
        ジオコーディングを実行

        Args:
            query: クエリ（またはビルダー）

        Returns:
            Optional[AddressRecord]: 住所情報（結果がない場合はNone）
        """
        if isinstance(query, RequestBuilder):
            query = query.build()

        url = build_request_url(query)
        safe_url = mask_api_key(url)
        cache_key = make_cache_key(url)

        if query.use_cache and self.cache is not None:
            cached = self._read_cache(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {safe_url}")
                return cached
            logger.debug(f"Cache miss for {safe_url}")

        response = self.transport.get(url)
        record = self.normalizer.normalize(response.text, url)

        if record is not None and self.cache is not None:
            self.cache.put(cache_key, record.to_dict(), query.cache_seconds)

        return record

    def _read_cache(self, cache_key: str) -> Optional[AddressRecord]:
        """latを持つ辞書のみを有効なキャッシュとして扱う"""
        value: Any = self.cache.get(cache_key) if self.cache is not None else None
        if not isinstance(value, dict) or value.get("lat") is None:
            return None

        try:
            return AddressRecord.from_dict(value)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed cache entry {cache_key}: {e}")
            return None
