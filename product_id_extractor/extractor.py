"""URL からの商品 ID 抽出モジュール.

抽出順序:
  1. ストア固有の pathname パターン (transform_id があれば適用)
  2. 汎用 pathname パターン (1 で 1 件も取れなかった場合のみ)
  3. ストア固有の search パターン
  4. 汎用 search パターン (3 の結果に関係なく常に実行)

結果はソート済み・重複なし・最大 12 件のタプルで返す。
"""

from __future__ import annotations

import logging
import re
import time
from typing import Annotated, Callable, Iterable

from pydantic import Field, StringConstraints, TypeAdapter

from product_id_extractor.config import (
    MAX_SOURCE_LENGTH,
    MAX_STORE_ID_LENGTH,
    PATTERN_EXTRACTOR_MAX_RESULTS,
    PATTERN_EXTRACTOR_TIMEOUT_MS,
    PRODUCT_ID_MAX_LENGTH,
    PRODUCT_ID_PATTERN,
    TIMEOUT_CHECK_INTERVAL,
    is_production,
)
from product_id_extractor.errors import InvalidInput
from product_id_extractor.models import ProductIds, UrlComponents
from product_id_extractor.patterns import PATHNAME_PATTERNS, REQUIRED_FLAGS, SEARCH_PATTERN
from product_id_extractor.store_registry import (
    StoreRegistry,
    coerce_store_id,
    get_default_registry,
)
from product_id_extractor.url_parser import parse_url_components

logger = logging.getLogger(__name__)

ProductId = Annotated[
    str,
    StringConstraints(min_length=1, max_length=PRODUCT_ID_MAX_LENGTH, pattern=PRODUCT_ID_PATTERN),
]

# 出力の検証用。違反はパターン・transform_id の設定ミスを意味する
_PRODUCT_IDS_ADAPTER = TypeAdapter(
    Annotated[tuple[ProductId, ...], Field(max_length=PATTERN_EXTRACTOR_MAX_RESULTS)]
)


def _now_ms() -> float:
    return time.monotonic() * 1000


def pattern_extractor(source: str, pattern: re.Pattern) -> set[str]:
    """正規表現で文字列から ID を抽出する.

    - マッチごとにキャプチャグループ 1・2 を小文字化して集める
    - 100ms を超えたら打ち切り (経過時間は 5 回に 1 回確認)
    - 12 件集まったら打ち切り
    - パターン実行中の例外は外に出さず、それまでの結果を返す

    走査位置はこの呼び出し専用のイテレータが持つため、同じパターンを
    続けて (あるいは並行して) 使っても前回の位置を引き継がない。

    Args:
        source: 照合対象 (小文字化済みの pathname / search)
        pattern: re.ASCII でコンパイル済みのパターン

    Returns:
        抽出した ID の集合 (空の場合もある)

    Raises:
        InvalidInput: source が文字列でない・長すぎる、pattern がコンパイル済みでない場合
    """
    if not isinstance(source, str):
        raise InvalidInput("source は文字列で指定してください", {"source": source})
    if len(source) > MAX_SOURCE_LENGTH:
        raise InvalidInput(
            "source が長すぎます",
            {"length": len(source), "max": MAX_SOURCE_LENGTH},
        )
    if not isinstance(pattern, re.Pattern):
        raise InvalidInput("pattern はコンパイル済みの正規表現で指定してください")

    if not is_production() and not pattern.flags & REQUIRED_FLAGS:
        logger.warning("re.ASCII なしのパターンは使えません: %s", pattern.pattern)
        return set()

    return _scan(source, pattern)


def _scan(source: str, pattern: re.Pattern) -> set[str]:
    """入力検証なしで照合する. 抽出順序の各段階から直接呼ぶ."""
    matches: set[str] = set()
    start = _now_ms()
    iteration = 0

    try:
        for match in pattern.finditer(source):
            iteration += 1
            if iteration % TIMEOUT_CHECK_INTERVAL == 0:
                elapsed = _now_ms() - start
                if elapsed >= PATTERN_EXTRACTOR_TIMEOUT_MS:
                    _diagnose(
                        "パターン抽出がタイムアウト: elapsed=%.1fms, source_length=%d, iterations=%d",
                        elapsed, len(source), iteration,
                    )
                    break

            for group in match.groups()[:2]:
                if group:
                    matches.add(group.lower())

            if len(matches) >= PATTERN_EXTRACTOR_MAX_RESULTS:
                _diagnose("抽出件数の上限 %d 件に到達", PATTERN_EXTRACTOR_MAX_RESULTS)
                break
    except Exception as e:
        _diagnose(
            "パターン抽出エラー: source_length=%d, error=%s",
            len(source), e, level=logging.ERROR,
        )

    return matches


def _diagnose(message: str, *args, level: int = logging.WARNING) -> None:
    """本番以外でのみ診断ログを出す."""
    if not is_production():
        logger.log(level, message, *args)


def _add_pattern_matches(
    source: str,
    patterns: Iterable[re.Pattern] | None,
    results: set[str],
    transform: Callable[[str], str] | None = None,
) -> None:
    """パターンを順に適用し、上限に達するまで results に追加する."""
    if not source or not patterns:
        return

    for pattern in patterns:
        if len(results) >= PATTERN_EXTRACTOR_MAX_RESULTS:
            return

        for id_ in sorted(_scan(source, pattern)):
            results.add(transform(id_) if transform else id_)
            if len(results) >= PATTERN_EXTRACTOR_MAX_RESULTS:
                return


def extract_ids_from_url_components(
    url_components: UrlComponents,
    store_id: str | None = None,
    registry: StoreRegistry | None = None,
) -> ProductIds:
    """URL 構成要素から商品 ID を抽出する.

    Args:
        url_components: parse_url_components の結果
        store_id: ストア ID。指定時はドメインより優先してストア設定を引く
        registry: ストアレジストリ。省略時は組み込みの設定

    Returns:
        ソート済み・重複なし・最大 12 件の商品 ID タプル

    Raises:
        InvalidInput: 引数の型が不正、または store_id が空・長すぎる場合
        pydantic.ValidationError: 出力が ID の制約を満たさない場合 (設定の不具合)
    """
    if not isinstance(url_components, UrlComponents):
        raise InvalidInput("url_components は UrlComponents で指定してください")
    if store_id is not None and (
        not isinstance(store_id, str) or not 0 < len(store_id) <= MAX_STORE_ID_LENGTH
    ):
        raise InvalidInput(
            f"store_id は 1〜{MAX_STORE_ID_LENGTH} 文字の文字列で指定してください",
            {"store_id": store_id},
        )

    pathname = url_components.pathname.lower()
    search = url_components.search.lower()
    results: set[str] = set()
    if registry is None:
        registry = get_default_registry()

    try:
        store_config = registry.get(id=store_id, domain=url_components.domain)

        if store_config is not None:
            _add_pattern_matches(
                pathname, store_config.pathname_patterns, results, store_config.transform_id,
            )

        # ストア固有パターンで 1 件も取れなかった場合のみ汎用パターンを使う
        if not results and pathname:
            _add_pattern_matches(pathname, PATHNAME_PATTERNS, results)

        if search and len(results) < PATTERN_EXTRACTOR_MAX_RESULTS:
            if store_config is not None:
                _add_pattern_matches(search, store_config.search_patterns, results)
            # pathname と違い、ストア固有の結果があっても汎用パターンを実行する
            _add_pattern_matches(search, (SEARCH_PATTERN,), results)
    except Exception as e:
        _diagnose(
            "URL の処理中にエラー: href_length=%d, error=%s",
            len(url_components.href), e, level=logging.ERROR,
        )

    return validate_product_ids(sorted(results))


def validate_product_ids(ids: Iterable[str]) -> ProductIds:
    """商品 ID 列を出力スキーマで検証し、タプルで返す."""
    return _PRODUCT_IDS_ADAPTER.validate_python(tuple(ids))


def extract_ids_from_url(
    url: str,
    store_id: str | int | None = None,
    registry: StoreRegistry | None = None,
) -> ProductIds:
    """URL 文字列から直接商品 ID を抽出する.

    Raises:
        InvalidInput / UnsupportedScheme / UrlParseError: URL が不正な場合
    """
    url_components = parse_url_components(url)
    return extract_ids_from_url_components(
        url_components, store_id=coerce_store_id(store_id), registry=registry,
    )
