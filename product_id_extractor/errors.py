"""例外定義.

入力エラー（空 URL・不正なホスト名など）は境界で即座に送出する。
ストア設定の未登録は例外ではなく None で表し、パターン実行時の障害は
抽出エンジン内で握りつぶして部分結果を返す（ここには定義しない）。
"""

from __future__ import annotations

from typing import Any


class ProductIdError(Exception):
    """本パッケージの例外の基底クラス."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | details: {self.details}"
        return self.message


class InvalidInput(ProductIdError, ValueError):
    """引数の型・長さが不正 (空 URL、空のストア ID など)."""


class UrlParseError(ProductIdError, ValueError):
    """URL を正規化・パースできない."""

    def __init__(self, url: str, reason: str = ""):
        message = f"URL を解析できません: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"url": url})
        self.url = url


class UnsupportedScheme(UrlParseError):
    """HTTP(S) 以外のスキーム."""

    def __init__(self, url: str, scheme: str):
        super().__init__(url, f"未対応のスキーム: {scheme}")
        self.scheme = scheme


class InvalidHostname(ProductIdError, ValueError):
    """ホスト名が空、または形式が不正."""

    def __init__(self, hostname: object, reason: str = ""):
        message = f"ホスト名が不正です: {hostname!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"hostname": hostname})
        self.hostname = hostname


class SchemaValidationError(ProductIdError, ValueError):
    """schema.org Product として不正な JSON-LD."""

    def __init__(self, errors: list[str]):
        super().__init__(f"商品スキーマが不正です: {', '.join(errors)}", {"errors": errors})
        self.errors = errors
