"""アプリケーション設定（Pydantic Settings）"""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="google-geocoder",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # GCP
    gcp_project_id: Optional[str] = Field(
        default=None,
        description="GCPプロジェクトID（Secret Manager / Firestore利用時に必要）",
    )

    # Google Maps
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API Key（設定されていればSecret Managerより優先）",
    )
    google_maps_api_key_secret_name: str = Field(
        default="google-maps-api-key",
        description="Google Maps API KeyのSecret Manager名",
    )

    # Geocoding
    geocoding_endpoint: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Geocoding APIのエンドポイント",
    )
    geocoding_language: Optional[str] = Field(
        default=None,
        description="レスポンスの言語（例: ja, en）",
    )
    geocoding_region: Optional[str] = Field(
        default=None,
        description="地域バイアス（ccTLD。gbはukに変換される）",
    )
    geocoding_cache_enabled: bool = Field(
        default=True,
        description="キャッシュからの読み込みを有効にするか",
    )
    geocoding_cache_seconds: int = Field(
        default=86400,
        ge=0,
        description="キャッシュの有効期間（秒）",
    )
    geocoding_cache_backend: Literal["memory", "firestore"] = Field(
        default="memory",
        description="キャッシュストア (memory, firestore)",
    )

    # Firestore
    firestore_database_id: str = Field(
        default="(default)",
        description="FirestoreデータベースID",
    )
    firestore_cache_collection: str = Field(
        default="geocode_cache",
        description="ジオコーディングキャッシュのコレクション名",
    )

    # HTTP
    http_timeout: int = Field(
        default=20,
        description="HTTPリクエストのタイムアウト（秒）",
    )
    http_user_agent: str = Field(
        default="google-geocoder/1.0",
        description="HTTPリクエストのUser-Agent",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Loggingを有効にするか",
    )
