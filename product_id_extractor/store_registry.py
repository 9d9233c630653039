"""ストア設定レジストリ.

ストア ID・ドメインからストア設定を引く。別名 (alias) の ID・ドメインも
同じ設定に解決される。索引は生成時に一度だけ作り、以後は変更しない。
"""

from __future__ import annotations

import logging
from collections import Counter
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping

from product_id_extractor.models import StoreConfig
from product_id_extractor.store_configs import STORE_CONFIGS

logger = logging.getLogger(__name__)


class StoreRegistry:
    """ストア ID → 設定、ドメイン → ストア ID の 2 つの読み取り専用索引."""

    def __init__(self, configs: Iterable[StoreConfig]):
        self._configs: tuple[StoreConfig, ...] = tuple(configs)

        by_id: dict[str, StoreConfig] = {}
        by_domain: dict[str, str] = {}
        for config in self._configs:
            by_id[config.id] = config
            by_domain[config.domain] = config.id
            for alias in config.aliases:
                by_id[alias.id] = config
                by_domain[alias.domain] = alias.id

        self._by_id: Mapping[str, StoreConfig] = MappingProxyType(by_id)
        self._by_domain: Mapping[str, str] = MappingProxyType(by_domain)

    @property
    def configs(self) -> tuple[StoreConfig, ...]:
        return self._configs

    @property
    def by_id(self) -> Mapping[str, StoreConfig]:
        return self._by_id

    @property
    def by_domain(self) -> Mapping[str, str]:
        return self._by_domain

    def __len__(self) -> int:
        return len(self._configs)

    def get(self, id: str | None = None, domain: str | None = None) -> StoreConfig | None:
        """ストア設定を取得する.

        id が指定されていれば domain より優先する。どちらでも見つからない
        場合は None を返す (汎用パターンのみで抽出する、という意味でありエラーではない)。

        Args:
            id: ストア ID (例: "9528")
            domain: ベースドメイン (例: "nike.com")

        Returns:
            StoreConfig。未登録なら None。
        """
        if id is not None:
            return self._by_id.get(id)

        if domain is not None:
            store_id = self._by_domain.get(domain)
            return None if store_id is None else self._by_id.get(store_id)

        return None


def build_registry(configs: Iterable[StoreConfig] = STORE_CONFIGS) -> StoreRegistry:
    """ストア設定一覧からレジストリを作る. テストでは独自の設定を渡して使う."""
    registry = StoreRegistry(configs)
    logger.debug(
        "ストアレジストリ生成: stores=%d, ids=%d, domains=%d",
        len(registry), len(registry.by_id), len(registry.by_domain),
    )
    return registry


@lru_cache(maxsize=1)
def get_default_registry() -> StoreRegistry:
    """組み込みのストア設定から作ったレジストリ (プロセス内で共有)."""
    return build_registry(STORE_CONFIGS)


def get_store_config(id: str | None = None, domain: str | None = None) -> StoreConfig | None:
    """組み込みレジストリからストア設定を取得する."""
    return get_default_registry().get(id=id, domain=domain)


def find_duplicate_keys(configs: Iterable[StoreConfig]) -> dict[str, list[str]]:
    """複数のストアで重複している ID・ドメインを見つける.

    同じストア内で主 ID と別名 ID が同じ値なのは重複とみなさない。
    実行時には検出しないので、設定を追加したらテストで確認する。

    Returns:
        {"ids": [...], "domains": [...]}。重複がなければ両方空リスト。
    """
    id_counts: Counter[str] = Counter()
    domain_counts: Counter[str] = Counter()

    for config in configs:
        id_counts.update({config.id} | {alias.id for alias in config.aliases})
        domain_counts.update({config.domain} | {alias.domain for alias in config.aliases})

    return {
        "ids": sorted(key for key, count in id_counts.items() if count > 1),
        "domains": sorted(key for key, count in domain_counts.items() if count > 1),
    }


def coerce_store_id(store_id: str | int | None) -> str | None:
    """ストア ID を文字列に揃える.

    ストア ID は数値とは限らない (例: "uk-87262") が、呼び出し元から
    数値で渡されることがあるため文字列に変換する。

    Returns:
        前後の空白を除いた文字列。None・空文字・空白のみなら None。
    """
    if store_id is None or isinstance(store_id, bool):
        return None
    if isinstance(store_id, int):
        return str(store_id)

    trimmed = str(store_id).strip()
    return trimmed or None
