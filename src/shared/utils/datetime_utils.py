"""日時関連ユーティリティ"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def now_utc() -> datetime:
    """現在のUTC時間を取得"""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    datetimeをUTCに変換

    Args:
        dt: 変換対象のdatetime

    Returns:
        UTCのdatetime
    """
    if dt.tzinfo is None:
        # タイムゾーン情報がない場合はUTCとして扱う
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def expires_at(ttl_seconds: int, now: Optional[datetime] = None) -> datetime:
    """
    有効期限を計算

    Args:
        ttl_seconds: 有効期間（秒）
        now: 基準時刻（省略時は現在時刻）

    Returns:
        UTCの有効期限
    """
    base = to_utc(now) if now else now_utc()
    return base + timedelta(seconds=ttl_seconds)


def is_expired(expiry: datetime, now: Optional[datetime] = None) -> bool:
    """有効期限を過ぎているか"""
    current = to_utc(now) if now else now_utc()
    return to_utc(expiry) <= current
