"""データモデル定義."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

# ソート済み・重複なし・小文字・最大 12 件の商品 ID 列
ProductIds = tuple[str, ...]


@dataclass(frozen=True)
class UrlComponents:
    """正規化済み URL の構成要素. URL ごとに生成し、変更しない."""

    href: str  # 正規化後の URL (小文字、https、トラッキングパラメータ除去済み)
    hostname: str  # 例: nike.com
    pathname: str  # 例: /t/air-max-90/cn8490-100 (ルートは "/")
    search: str  # 例: ?pid=123456 (なければ "")
    domain: str  # ベースドメイン (例: oldnavy.gap.com)
    key: str  # domain+pathname+search の 16 文字ハッシュ
    original: str  # 正規化前の入力文字列
    encoded_href: str = ""  # href をパーセントエンコードしたもの


@dataclass(frozen=True)
class StoreAlias:
    """同じストア設定に解決される別 ID・別ドメイン."""

    id: str
    domain: str


@dataclass(frozen=True)
class StoreConfig:
    """ストアごとの商品 ID 抽出ルール."""

    id: str  # ストア ID (例: 9528)
    domain: str  # 例: nike.com
    aliases: tuple[StoreAlias, ...] = ()
    pathname_patterns: tuple[re.Pattern, ...] = ()
    search_patterns: tuple[re.Pattern, ...] = ()
    # 抽出した ID ごとに適用する純粋関数 (例外・I/O 禁止)
    transform_id: Callable[[str], str] | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ProductSchema:
    """schema.org Product (JSON-LD) の要約."""

    name: str
    brand: str | None
    model: str | None
    sku: str | None
    description: str | None
    skus: tuple[str, ...]
