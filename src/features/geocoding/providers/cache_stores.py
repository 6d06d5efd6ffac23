"""ジオコーディング結果のキャッシュストア"""

import time
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from ....shared.exceptions.errors import CacheError, StorageError
from ....shared.logging.config import get_logger
from ....shared.utils.datetime_utils import expires_at, is_expired
from ...storage.clients.firestore_client import FirestoreClient

logger = get_logger(__name__)


class CacheStore(Protocol):
    """キャッシュストアのインターフェース（キーはURLのハッシュ）"""

    def get(self, key: str) -> Optional[Any]:
        ...

    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        ...


class InMemoryCacheStore:
    """
    メモリ内キャッシュ

    エントリごとに有効期限を持ち、期限切れのエントリは読み込み時と書き込み時に削除する。
    プロセス内でのみ有効。
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Args:
            clock: 現在時刻（秒）を返す関数（テスト時に差し替え）
        """
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self.hit_count = 0
        self.miss_count = 0

        logger.info("InMemoryCacheStore initialized")

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self.miss_count += 1
            return None

        expiry, value = entry
        if expiry <= self._clock():
            del self._entries[key]
            self.miss_count += 1
            logger.debug(f"Cache entry expired: {key}")
            return None

        self.hit_count += 1
        return value

    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = (now + ttl_seconds, value)

    def _purge_expired(self, now: float) -> None:
        expired_keys = [key for key, (expiry, _) in self._entries.items() if expiry <= now]
        for key in expired_keys:
            del self._entries[key]

        if expired_keys:
            logger.debug(f"Purged {len(expired_keys)} expired cache entries")

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """キャッシュをクリア"""
        cache_size = len(self._entries)
        self._entries.clear()
        self.hit_count = 0
        self.miss_count = 0
        logger.info(f"Cache cleared: {cache_size} entries removed")

    def get_cache_stats(self) -> dict[str, float]:
        """
        キャッシュ統計を取得

        Returns:
            dict[str, float]: キャッシュ統計（サイズ、ヒット数、ミス数、ヒット率）
        """
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "cache_size": len(self._entries),
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }


class FirestoreCacheStore:
    """
    Firestoreを使ったキャッシュ

    1キー = 1ドキュメント ({"value": ..., "expires_at": ...})。
    期限切れドキュメントは読み込み時に「なし」として扱う。
    expires_atにFirestoreのTTLポリシーを設定すれば物理削除も自動化できる。
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection: str = "geocode_cache",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Args:
            firestore_client: Firestoreクライアント
            collection: キャッシュ用コレクション名
            clock: 現在時刻を返す関数（テスト時に差し替え）
        """
        self.client = firestore_client
        self.collection = collection
        self._clock = clock

        logger.info(f"FirestoreCacheStore initialized: collection={collection}")

    def _now(self) -> Optional[datetime]:
        return self._clock() if self._clock else None

    def get(self, key: str) -> Optional[Any]:
        """
        Raises:
            CacheError: Firestoreの読み込みに失敗した場合
        """
        try:
            doc = self.client.get_document(self.collection, key)
        except StorageError as e:
            raise CacheError(f"Failed to read cache entry {key}: {e}") from e

        if not doc:
            return None

        expiry = doc.get("expires_at")
        if not isinstance(expiry, datetime) or is_expired(expiry, self._now()):
            logger.debug(f"Cache entry expired: {key}")
            return None

        return doc.get("value")

    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        """
        Raises:
            CacheError: Firestoreへの書き込みに失敗した場合
        """
        document = {
            "value": value,
            "expires_at": expires_at(ttl_seconds, self._now()),
        }
        try:
            self.client.set_document(self.collection, key, document)
        except StorageError as e:
            raise CacheError(f"Failed to write cache entry {key}: {e}") from e

    def delete(self, key: str) -> None:
        """キャッシュエントリを削除"""
        try:
            self.client.delete_document(self.collection, key)
        except StorageError as e:
            raise CacheError(f"Failed to delete cache entry {key}: {e}") from e
