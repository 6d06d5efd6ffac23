"""設定・Secret Managerのテスト"""

from unittest.mock import MagicMock

import pytest

from src.infrastructure.config.settings import Settings
from src.infrastructure.gcp.secret_manager import SecretManagerClient, resolve_api_key
from src.shared.exceptions.errors import ConfigurationError


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.geocoding_cache_enabled is True
    assert settings.geocoding_cache_seconds == 86400
    assert settings.geocoding_cache_backend == "memory"
    assert settings.environment == "development"
    assert settings.gcp_project_id is None


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "ENV_KEY")
    monkeypatch.setenv("GEOCODING_CACHE_SECONDS", "60")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = Settings(_env_file=None)

    assert settings.google_maps_api_key == "ENV_KEY"
    assert settings.geocoding_cache_seconds == 60
    assert settings.environment == "production"


def make_secret_client(value: bytes = b"SECRET_KEY\n") -> SecretManagerClient:
    service_client = MagicMock()
    service_client.access_secret_version.return_value.payload.data = value
    return SecretManagerClient("my-project", client=service_client)


def test_get_secret() -> None:
    client = make_secret_client()

    assert client.get_secret("google-maps-api-key") == "SECRET_KEY"
    client.client.access_secret_version.assert_called_once_with(
        request={"name": "projects/my-project/secrets/google-maps-api-key/versions/latest"}
    )


def test_get_secret_failure() -> None:
    client = make_secret_client()
    client.client.access_secret_version.side_effect = RuntimeError("permission denied")

    with pytest.raises(ConfigurationError):
        client.get_secret("google-maps-api-key")


def test_resolve_api_key_prefers_setting() -> None:
    settings = Settings(_env_file=None, google_maps_api_key="KEY")
    secret_client = make_secret_client()

    assert resolve_api_key(settings, secret_client) == "KEY"
    secret_client.client.access_secret_version.assert_not_called()


def test_resolve_api_key_from_secret_manager() -> None:
    settings = Settings(_env_file=None, google_maps_api_key=None, gcp_project_id="my-project")

    assert resolve_api_key(settings, make_secret_client()) == "SECRET_KEY"


def test_resolve_api_key_without_project() -> None:
    settings = Settings(_env_file=None, google_maps_api_key=None, gcp_project_id=None)

    with pytest.raises(ConfigurationError):
        resolve_api_key(settings)
