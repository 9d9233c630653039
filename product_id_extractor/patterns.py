"""汎用抽出パターンとパターン安全性チェック.

パターンの書き方のルール:
  - 照合前に URL を小文字化するため、リテラルは小文字のみ (re.IGNORECASE 禁止)
  - \\w / \\d / \\b を ASCII で解釈させるため re.ASCII でコンパイルする
  - キャプチャグループは 2 つまで (抽出エンジンは 1 番目と 2 番目だけを読む)
  - 量指定子の入れ子や巨大な文字クラスなど、バックトラックが爆発する書き方を避ける

ルール違反はリクエスト処理中ではなく、テスト時に find_pattern_violations で検出する。
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from product_id_extractor.models import StoreConfig

# ?sku=xxxx / &pid=xxxx などのクエリパラメータ
SEARCH_PATTERN = re.compile(
    r"[?&](?:sku|pid|id|productid|skuid|athcpid|upc_id|variant|prdtno)=([\w-]{4,24})",
    re.ASCII,
)

# prod123456 / prd-123456 / p123456 (全体と数字部分の両方を取る)
PRODUCT_ID_PATTERN = re.compile(r"\b((?:prod|prd|p)-?(\d{6,19}))\b", re.ASCII)

# 末尾の数字 ID: /123456, -123456, -123456.html
NUMERIC_END_PATTERN = re.compile(r"\b[/-](\d{6,24})(?:\.html)?$", re.ASCII)

PATHNAME_PATTERNS: tuple[re.Pattern, ...] = (PRODUCT_ID_PATTERN, NUMERIC_END_PATTERN)

REQUIRED_FLAGS = re.ASCII
MAX_CAPTURE_GROUPS = 2
MAX_CHAR_CLASS_LENGTH = 20

_ESCAPE_SEQUENCE = re.compile(r"\\.")
_UPPERCASE = re.compile(r"[A-Z]")
_NESTED_QUANTIFIER = re.compile(r"[+*?]{2,}|\{.+\}[+*?]|[+*?]\{.+\}")
_LARGE_CHAR_CLASS = re.compile(r"\[([^\]]{%d,})\]" % MAX_CHAR_CLASS_LENGTH)


def iter_all_patterns(configs: Iterable[StoreConfig]) -> Iterator[re.Pattern]:
    """汎用パターンと全ストアのパターンを列挙する."""
    yield from PATHNAME_PATTERNS
    yield SEARCH_PATTERN
    for config in configs:
        yield from config.pathname_patterns
        yield from config.search_patterns


def find_pattern_violations(pattern: re.Pattern) -> list[str]:
    """パターンの書き方のルール違反を列挙する.

    Returns:
        違反内容のリスト。問題なければ空リスト。
    """
    violations: list[str] = []
    source = pattern.pattern
    # \d \b \. などのエスケープはチェック対象外にする
    literal_source = _ESCAPE_SEQUENCE.sub("_", source)

    if _UPPERCASE.search(literal_source):
        violations.append("大文字のリテラルを含む")
    if pattern.flags & re.IGNORECASE:
        violations.append("re.IGNORECASE が指定されている")
    if not pattern.flags & REQUIRED_FLAGS:
        violations.append("re.ASCII が指定されていない")
    if pattern.groups > MAX_CAPTURE_GROUPS:
        violations.append(f"キャプチャグループが {pattern.groups} 個ある")
    if _NESTED_QUANTIFIER.search(literal_source):
        violations.append("量指定子が入れ子になっている")

    large_class = _LARGE_CHAR_CLASS.search(source)
    if large_class:
        violations.append(f"文字クラスが大きすぎる: [{large_class.group(1)}]")

    return violations
