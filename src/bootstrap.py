"""アプリケーションからの利用時の初期化"""
from typing import Optional

from .features.geocoding.services.geocoding_service import (
    GeocodingService,
    create_geocoding_service,
)
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def bootstrap(
    env_file: Optional[str] = ".env", settings: Optional[Settings] = None
) -> GeocodingService:
    """
    設定を読み込み、ロギングを設定してGeocodingServiceを作成

    Args:
        env_file: 環境変数ファイルのパス（settings指定時は無視）
        settings: 設定済みのSettings

    Raises:
        ConfigurationError: APIキーを解決できない場合
    """
    if settings is None:
        settings = Settings(_env_file=env_file)

    setup_logging(
        level=settings.log_level,
        enable_cloud_logging=settings.gcp_logging_enabled,
        project_id=settings.gcp_project_id,
    )

    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Project: {settings.project_name}")
    logger.info(
        f"Geocoding cache: enabled={settings.geocoding_cache_enabled}, "
        f"backend={settings.geocoding_cache_backend}, ttl={settings.geocoding_cache_seconds}s"
    )

    return create_geocoding_service(settings)
