"""schema.org (JSON-LD) の商品情報パーサー.

商品ページに埋め込まれた <script type="application/ld+json"> から
Product を取り出し、SKU を再帰的に集める。URL から ID が取れない
ストアで、ページ側の SKU と突き合わせるために使う。
"""

from __future__ import annotations

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from product_id_extractor.errors import SchemaValidationError
from product_id_extractor.models import ProductSchema

logger = logging.getLogger(__name__)

_SCHEMA_CONTEXTS = frozenset({"https://schema.org", "http://schema.org"})

# SKU を探しに潜るキー (Offer, ProductGroup の variant, ProductModel)
_NESTED_KEYS = ("offers", "hasVariant", "isVariantOf", "model")


def extract_json_ld(html: str) -> list[dict]:
    """HTML から JSON-LD ブロックを全て取り出す.

    トップレベルの配列と @graph は展開し、dict だけを返す。
    JSON として読めないブロックは読み飛ばす。
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks: list[dict] = []

    for script in soup.find_all("script", type="application/ld+json"):
        try:
            data = json.loads(script.string)
        except (json.JSONDecodeError, TypeError):
            logger.debug("JSON-LD をパースできないブロックをスキップ")
            continue

        for item in data if isinstance(data, list) else [data]:
            if not isinstance(item, dict):
                continue
            graph = item.get("@graph")
            if isinstance(graph, list):
                blocks.extend(node for node in graph if isinstance(node, dict))
            else:
                blocks.append(item)

    return blocks


def product_schema_errors(schema: Any) -> list[str]:
    """Product スキーマとしての不備を列挙する. 問題なければ空リスト."""
    if not isinstance(schema, dict):
        return ["object ではありません"]

    errors: list[str] = []
    if schema.get("@context") not in _SCHEMA_CONTEXTS:
        errors.append("@context が schema.org ではありません")

    schema_type = schema.get("@type")
    types = schema_type if isinstance(schema_type, list) else [schema_type]
    if "Product" not in types:
        errors.append("@type が Product ではありません")

    name = schema.get("name")
    if not isinstance(name, str) or not name:
        errors.append("name がありません")

    return errors


def is_valid_product_schema(schema: Any) -> bool:
    return not product_schema_errors(schema)


def validate_product_schema(schema: Any) -> dict:
    """Product スキーマを検証する.

    Raises:
        SchemaValidationError: @context / @type / name のいずれかが不正な場合
    """
    errors = product_schema_errors(schema)
    if errors:
        raise SchemaValidationError(errors)
    return schema


def extract_skus_from_schema(schema: Any) -> list[str]:
    """Product / ProductGroup などから SKU を再帰的に集める.

    sku・offers・hasVariant・isVariantOf・model をたどる。循環参照は
    一度訪れたオブジェクトをスキップして止める。

    Returns:
        出現順を保った重複なしの SKU リスト
    """
    skus: list[str] = []
    seen: set[int] = set()

    def _walk(node: Any) -> None:
        if isinstance(node, list):
            for child in node:
                _walk(child)
            return
        if not isinstance(node, dict) or id(node) in seen:
            return
        seen.add(id(node))

        sku = node.get("sku")
        if isinstance(sku, str):
            skus.append(sku)
        elif isinstance(sku, list):
            skus.extend(s for s in sku if isinstance(s, str))

        for key in _NESTED_KEYS:
            if node.get(key):
                _walk(node[key])

    _walk(schema)
    return list(dict.fromkeys(skus))


def parse_product_schema(schema: Any) -> ProductSchema | None:
    """Product スキーマを ProductSchema に要約する.

    Returns:
        ProductSchema。Product として不正なら None。
    """
    errors = product_schema_errors(schema)
    if errors:
        logger.debug("Product スキーマではありません: %s", errors)
        return None

    brand = schema.get("brand")
    if isinstance(brand, dict):
        brand = brand.get("name")

    model = schema.get("model")
    if isinstance(model, dict):
        model = model.get("name")

    return ProductSchema(
        name=schema["name"],
        brand=_str_or_none(brand),
        model=_str_or_none(model),
        sku=_str_or_none(schema.get("sku")),
        description=_str_or_none(schema.get("description")),
        skus=tuple(extract_skus_from_schema(schema)),
    )


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def extract_skus_from_html(html: str) -> list[str]:
    """HTML 内の全 Product スキーマから SKU を集める."""
    skus: list[str] = []
    for block in extract_json_ld(html):
        product = parse_product_schema(block)
        if product is not None:
            skus.extend(product.skus)

    logger.debug("JSON-LD から SKU を %d 件抽出", len(skus))
    return list(dict.fromkeys(skus))
