"""共通モジュール（HTTPクライアント・テキスト処理）のテスト"""

from unittest.mock import MagicMock

import pytest
import requests

from src.shared.exceptions.errors import HTTPError
from src.shared.http.client import HTTPClient
from src.shared.utils.text import mask_api_key, remove_whitespace


@pytest.mark.parametrize(
    "text,expected",
    [
        ("SW1P 3PA", "SW1P3PA"),
        (" 150\t-\n0002 ", "150-0002"),
        ("", ""),
    ],
)
def test_remove_whitespace(text: str, expected: str) -> None:
    assert remove_whitespace(text) == expected


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://example.com/json?key=SECRET&address=x", "https://example.com/json?key=***&address=x"),
        ("https://example.com/json?key=SECRET", "https://example.com/json?key=***"),
        ("https://example.com/json?address=x&key=SECRET", "https://example.com/json?address=x&key=***"),
        ("https://example.com/json?monkey=x", "https://example.com/json?monkey=x"),
    ],
)
def test_mask_api_key(url: str, expected: str) -> None:
    assert mask_api_key(url) == expected


def test_http_client_get() -> None:
    client = HTTPClient(timeout=5, user_agent="test-agent")
    response = MagicMock(status_code=200, text='{"results": []}')
    client.session = MagicMock()
    client.session.get.return_value = response

    assert client.get("https://example.com/json?key=K") is response
    client.session.get.assert_called_once_with(
        "https://example.com/json?key=K", params=None, headers=None, timeout=5
    )
    response.raise_for_status.assert_called_once_with()


def test_http_client_wraps_request_errors() -> None:
    client = HTTPClient()
    client.session = MagicMock()
    client.session.get.side_effect = requests.ConnectionError("refused")

    with pytest.raises(HTTPError) as exc_info:
        client.get("https://example.com/json?key=SECRET")

    assert "SECRET" not in str(exc_info.value)


def test_http_client_without_retries_uses_default_adapter() -> None:
    with HTTPClient() as client:
        assert client.session.headers["User-Agent"].startswith("geocoder/")
        assert client.session.get_adapter("https://x").max_retries.total == 0


def test_http_client_with_retries() -> None:
    with HTTPClient(max_retries=2) as client:
        assert client.session.get_adapter("https://x").max_retries.total == 2


def test_setup_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    import logging

    from src.shared.logging import config

    monkeypatch.setattr(config, "_logger_configured", False)
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level

    try:
        config.setup_logging(level="DEBUG")
        handlers = list(root_logger.handlers)
        config.setup_logging(level="ERROR")

        assert root_logger.level == logging.DEBUG
        assert root_logger.handlers == handlers
        assert logging.getLogger("urllib3").level == logging.WARNING
    finally:
        root_logger.handlers[:] = original_handlers
        root_logger.setLevel(original_level)
