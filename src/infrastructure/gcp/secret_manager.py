"""GCP Secret Manager連携（APIキーの取得）"""
from typing import Any, Optional

from google.cloud import secretmanager

from ...shared.exceptions.errors import ConfigurationError
from ...shared.logging.config import get_logger
from ..config.settings import Settings

logger = get_logger(__name__)


class SecretManagerClient:
    """Secret Managerクライアント"""

    def __init__(self, project_id: str, client: Optional[Any] = None):
        """
        Args:
            project_id: GCPプロジェクトID
            client: SecretManagerServiceClient（テスト時に差し替え）
        """
        self.project_id = project_id
        self.client = client or secretmanager.SecretManagerServiceClient()

    def get_secret(self, secret_name: str, version: str = "latest") -> str:
        """
        シークレットの値を取得

        Raises:
            ConfigurationError: シークレット取得失敗時
        """
        name = f"projects/{self.project_id}/secrets/{secret_name}/versions/{version}"
        try:
            logger.debug(f"Fetching secret: {name}")
            response = self.client.access_secret_version(request={"name": name})
            return response.payload.data.decode("UTF-8").strip()

        except Exception as e:
            logger.error(f"Failed to fetch secret {secret_name}: {e}")
            raise ConfigurationError(f"Failed to fetch secret {secret_name}: {e}") from e


def resolve_api_key(
    settings: Settings, secret_manager: Optional[SecretManagerClient] = None
) -> str:
    """
    Google Maps APIキーを解決

    優先順位:
    1. 設定値 (GOOGLE_MAPS_API_KEY)
    2. Secret Manager (GCP_PROJECT_ID が必要)

    Raises:
        ConfigurationError: どちらからも取得できない場合
    """
    if settings.google_maps_api_key:
        return settings.google_maps_api_key

    if secret_manager is None:
        if not settings.gcp_project_id:
            raise ConfigurationError(
                "Google Maps API key is not configured: "
                "set GOOGLE_MAPS_API_KEY or GCP_PROJECT_ID"
            )
        secret_manager = SecretManagerClient(settings.gcp_project_id)

    api_key = secret_manager.get_secret(settings.google_maps_api_key_secret_name)
    logger.info(f"Google Maps API key loaded from secret: {settings.google_maps_api_key_secret_name}")
    return api_key
