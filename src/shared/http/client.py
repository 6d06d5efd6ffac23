"""HTTPクライアント（ジオコーディングAPI用トランスポート）"""

from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions.errors import HTTPError
from ..logging.config import get_logger
from ..utils.text import mask_api_key

logger = get_logger(__name__)


class HTTPClient:
    """
    requests.Sessionを使ったHTTPクライアント

    Features:
    - タイムアウト設定
    - セッション管理（コネクションの再利用）
    - リトライ（デフォルトは無効。必要な場合のみmax_retriesを指定）
    """

    def __init__(
        self,
        timeout: int = 20,
        max_retries: int = 0,
        backoff_factor: float = 0.5,
        status_forcelist: tuple[int, ...] = (500, 502, 503, 504),
        user_agent: Optional[str] = None,
        raise_for_status: bool = True,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            max_retries: 最大リトライ回数（0でリトライしない）
            backoff_factor: バックオフ係数
            status_forcelist: リトライ対象のステータスコード
            user_agent: User-Agentヘッダー
            raise_for_status: 4xx/5xxをHTTPErrorとして扱うか
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.status_forcelist = status_forcelist
        self.user_agent = user_agent or "geocoder/1.0 (+python-requests)"
        self.raise_for_status = raise_for_status

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """セッションを作成"""
        session = requests.Session()

        if self.max_retries > 0:
            retry_strategy = Retry(
                total=self.max_retries,
                backoff_factor=self.backoff_factor,
                status_forcelist=self.status_forcelist,
                allowed_methods=["HEAD", "GET"],
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)

        session.headers.update({"User-Agent": self.user_agent})

        return session

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        """
        GETリクエスト

        Args:
            url: リクエストURL（クエリ文字列込みでそのまま送信される）
            params: 追加のクエリパラメータ
            headers: 追加ヘッダー

        Returns:
            レスポンスオブジェクト

        Raises:
            HTTPError: リクエスト失敗時
        """
        safe_url = mask_api_key(url)
        try:
            logger.debug(f"GET request to {safe_url}")
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )

            if self.raise_for_status:
                response.raise_for_status()

            logger.debug(f"GET request finished: {safe_url} (status={response.status_code})")
            return response

        except requests.RequestException as e:
            logger.error(f"GET request failed: {safe_url} - {mask_api_key(str(e))}")
            raise HTTPError(f"Failed to GET {safe_url}: {mask_api_key(str(e))}") from e

    def close(self) -> None:
        """セッションをクローズ"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
