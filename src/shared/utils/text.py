"""テキスト処理ユーティリティ"""

import re

_WHITESPACE_PATTERN = re.compile(r"\s+")
_API_KEY_PATTERN = re.compile(r"([?&]key=)[^&]*")


def remove_whitespace(text: str) -> str:
    """
    すべての空白文字を除去

    例: "SW1P 3PA" -> "SW1P3PA"
    """
    if not text:
        return ""

    return _WHITESPACE_PATTERN.sub("", text)


def mask_api_key(url: str) -> str:
    """URL中のAPIキーを伏せ字にする（ログ出力用）"""
    if not url:
        return url

    return _API_KEY_PATTERN.sub(r"\1***", url)
