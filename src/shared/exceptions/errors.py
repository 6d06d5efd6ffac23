"""カスタム例外定義"""


class GeocoderError(Exception):
    """ジオコーダー基底例外"""

    pass


class HTTPError(GeocoderError):
    """HTTP通信のエラー（トランスポート層）"""

    pass


class MalformedResponseError(GeocoderError):
    """APIレスポンスをJSONとして解析できない"""

    pass


class CacheError(GeocoderError):
    """キャッシュストアのエラー"""

    pass


class StorageError(GeocoderError):
    """ストレージ関連のエラー"""

    pass


class ConfigurationError(GeocoderError):
    """設定エラー"""

    pass


class ValidationError(GeocoderError):
    """バリデーションエラー"""

    pass
