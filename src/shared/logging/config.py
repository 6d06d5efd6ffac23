"""ロギング設定"""
import logging
import sys
from typing import Optional

_logger_configured = False

# 出力がうるさいライブラリ
_NOISY_LOGGERS = ("urllib3", "requests", "google", "google.cloud")


def setup_logging(
    level: str = "INFO",
    enable_cloud_logging: bool = False,
    project_id: Optional[str] = None,
) -> None:
    """
    ロギングを設定（2回目以降の呼び出しは無視）

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_cloud_logging: Cloud Loggingへも送信するか
        project_id: GCPプロジェクトID (Cloud Logging有効時に使用)
    """
    global _logger_configured

    if _logger_configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if enable_cloud_logging:
        _add_cloud_logging_handler(root_logger, log_level, project_id)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_configured = True
    logging.getLogger(__name__).info(f"Logging configured with level: {level}")


def _add_cloud_logging_handler(
    root_logger: logging.Logger, log_level: int, project_id: Optional[str]
) -> None:
    """Cloud Loggingハンドラーを追加（失敗しても処理は継続）"""
    try:
        from google.cloud import logging as cloud_logging
        from google.cloud.logging.handlers import CloudLoggingHandler

        client = cloud_logging.Client(project=project_id)
        cloud_handler = CloudLoggingHandler(client, name="geocoder")
        cloud_handler.setLevel(log_level)
        root_logger.addHandler(cloud_handler)
        root_logger.info("Cloud Logging enabled")
    except Exception as e:
        root_logger.warning(f"Failed to enable Cloud Logging: {e}")


def get_logger(name: str) -> logging.Logger:
    """
    指定名のロガーを取得

    Args:
        name: ロガー名（通常は__name__を指定）
    """
    return logging.getLogger(name)
