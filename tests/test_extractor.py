"""extractor モジュールのユニットテスト."""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from product_id_extractor.errors import InvalidInput
from product_id_extractor.extractor import (
    extract_ids_from_url,
    extract_ids_from_url_components,
    pattern_extractor,
    validate_product_ids,
)
from product_id_extractor.models import StoreConfig
from product_id_extractor.store_registry import build_registry
from product_id_extractor.url_parser import parse_url_components

_ID_FORMAT = re.compile(r"^[a-z0-9_-]{1,24}$")


def _ascii(source: str) -> re.Pattern:
    return re.compile(source, re.ASCII)


def _registry(*configs: StoreConfig):
    return build_registry(configs)


@pytest.fixture
def development(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")


class TestPatternExtractor:
    """pattern_extractor のテスト."""

    def test_two_groups(self):
        result = pattern_extractor("/p/abc-123", _ascii(r"/p/(\w+)-(\d+)"))
        assert result == {"abc", "123"}

    def test_lowercase(self):
        result = pattern_extractor("ID-ABC123", _ascii(r"(?i:id)-(\w+)"))
        assert result == {"abc123"}

    def test_skip_empty_group(self):
        result = pattern_extractor("/x/123456", _ascii(r"/(p)?x?/(\d{6})"))
        assert result == {"123456"}

    def test_only_first_two_groups(self):
        result = pattern_extractor("a-b-c", _ascii(r"(\w)-(\w)-(\w)"))
        assert result == {"a", "b"}

    def test_no_match(self):
        assert pattern_extractor("/about", _ascii(r"(\d{6})")) == set()

    def test_result_cap(self):
        """12 件集まったら打ち切ること."""
        source = " ".join(str(n) for n in range(100, 140))
        result = pattern_extractor(source, _ascii(r"\b(\d{3})\b"))
        assert len(result) == 12

    def test_timeout(self, development, caplog):
        """100ms を超えたら打ち切って途中までの結果を返すこと."""
        caplog.set_level(logging.WARNING, logger="product_id_extractor.extractor")
        with patch("product_id_extractor.extractor._now_ms", side_effect=[0.0, 250.0]):
            result = pattern_extractor("a1a2a3a4a5a6a7a8a9", _ascii(r"a(\d)"))

        assert result == {"1", "2", "3", "4"}
        assert "タイムアウト" in caplog.text

    def test_timeout_checked_every_five_iterations(self):
        with patch(
            "product_id_extractor.extractor._now_ms", side_effect=[0.0, 10.0]
        ) as mock_now:
            result = pattern_extractor("a1a2a3a4a5a6a7a8a9", _ascii(r"a(\d)"))

        assert len(result) == 9
        assert mock_now.call_count == 2

    def test_fault_contained(self, development, caplog):
        """パターン実行中の例外は外に出さず、それまでの結果を返すこと."""
        caplog.set_level(logging.ERROR, logger="product_id_extractor.extractor")
        first = re.match(r"(abc)", "abc")

        def _broken(source):
            yield first
            raise RuntimeError("boom")

        pattern = MagicMock(spec=re.Pattern)
        pattern.flags = re.ASCII
        pattern.finditer.side_effect = _broken

        assert pattern_extractor("abc", pattern) == {"abc"}
        assert "boom" in caplog.text

    def test_sequential_reuse(self):
        """同じパターンを続けて使っても前回の走査位置を引き継がないこと."""
        pattern = _ascii(r"/(\d{6})")
        first = pattern_extractor("/123456/654321", pattern)
        second = pattern_extractor("/123456/654321", pattern)
        assert first == second == {"123456", "654321"}

    def test_concurrent_reuse(self):
        pattern = _ascii(r"/(\d{6})")
        sources = [f"/{n:06d}/{n + 1:06d}" for n in range(100000, 100040)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda s: pattern_extractor(s, pattern), sources))

        for source, result in zip(sources, results):
            assert result == set(source.strip("/").split("/"))

    def test_non_ascii_pattern_rejected_in_development(self, development, caplog):
        caplog.set_level(logging.WARNING, logger="product_id_extractor.extractor")
        assert pattern_extractor("/123456", re.compile(r"/(\d{6})")) == set()
        assert "re.ASCII" in caplog.text

    def test_non_ascii_pattern_runs_in_production(self, production):
        assert pattern_extractor("/123456", re.compile(r"/(\d{6})")) == {"123456"}

    def test_no_logs_in_production(self, production, caplog):
        caplog.set_level(logging.DEBUG, logger="product_id_extractor.extractor")
        with patch("product_id_extractor.extractor._now_ms", side_effect=[0.0, 250.0]):
            pattern_extractor("a1a2a3a4a5a6", _ascii(r"a(\d)"))
        source = " ".join(str(n) for n in range(100, 140))
        pattern_extractor(source, _ascii(r"\b(\d{3})\b"))

        assert caplog.records == []

    def test_invalid_source(self):
        with pytest.raises(InvalidInput):
            pattern_extractor(None, _ascii(r"(\d)"))
        with pytest.raises(InvalidInput):
            pattern_extractor("a" * 10001, _ascii(r"(\d)"))

    def test_invalid_pattern(self):
        with pytest.raises(InvalidInput):
            pattern_extractor("/123456", r"(\d{6})")


class TestExtractIdsFromUrlComponents:
    """extract_ids_from_url_components のテスト."""

    def test_nike(self):
        components = parse_url_components(
            "https://www.nike.com/t/air-max-90-mens-shoes-6n8tkb/cn8490-100"
        )
        assert extract_ids_from_url_components(components) == ("6n8tkb", "cn8490-100")

    def test_no_ids(self):
        components = parse_url_components("https://example.com")
        assert extract_ids_from_url_components(components) == ()

    def test_store_patterns_take_priority(self):
        """ストア固有パターンで取れた場合は汎用 pathname パターンを使わないこと."""
        registry = _registry(StoreConfig(id="1", domain="x.com", pathname_patterns=(_ascii(r"/p/(\d+)/"),)))
        components = parse_url_components("https://x.com/p/123/prod-1234567")
        assert extract_ids_from_url_components(components, registry=registry) == ("123",)

    def test_generic_fallback(self):
        """ストア固有パターンで取れなければ汎用パターンを使うこと."""
        registry = _registry(StoreConfig(id="1", domain="x.com", pathname_patterns=(_ascii(r"/q/(\d+)/"),)))
        components = parse_url_components("https://x.com/p/123/prod-1234567")
        assert extract_ids_from_url_components(components, registry=registry) == (
            "1234567", "prod-1234567",
        )

    def test_generic_search_always_runs(self):
        """汎用 search パターンはストア固有の結果があっても実行されること."""
        registry = _registry(StoreConfig(
            id="1",
            domain="s.com",
            pathname_patterns=(_ascii(r"/item/(\d{4,8})"),),
            search_patterns=(_ascii(r"[?&]code=(\d{4,8})"),),
        ))
        components = parse_url_components("https://s.com/item/1234?code=5678&sku=abcd-99")
        assert extract_ids_from_url_components(components, registry=registry) == (
            "1234", "5678", "abcd-99",
        )

    def test_store_id_overrides_domain(self):
        registry = _registry(
            StoreConfig(id="1", domain="x.com", pathname_patterns=(_ascii(r"/a/(\w{4})"),)),
            StoreConfig(id="2", domain="y.com", pathname_patterns=(_ascii(r"/b/(\w{4})"),)),
        )
        components = parse_url_components("https://x.com/a/aaaa/b/bbbb")
        assert extract_ids_from_url_components(components, registry=registry) == ("aaaa",)
        assert extract_ids_from_url_components(components, store_id="2", registry=registry) == ("bbbb",)

    def test_transform_id(self):
        components = parse_url_components("https://www.samsclub.com/p/some-product/prod21380133")
        assert extract_ids_from_url_components(components) == ("21380133",)

    def test_invalid_transform_output(self):
        """出力が ID の制約を満たさない場合は ValidationError になること."""
        registry = _registry(StoreConfig(
            id="1",
            domain="x.com",
            pathname_patterns=(_ascii(r"/p/(\d+)"),),
            transform_id=lambda id_: f"{id_}!",
        ))
        components = parse_url_components("https://x.com/p/123")
        with pytest.raises(ValidationError):
            extract_ids_from_url_components(components, registry=registry)

    def test_result_cap(self):
        registry = _registry(StoreConfig(
            id="1",
            domain="x.com",
            pathname_patterns=(_ascii(r"/(\d{4})\b"), _ascii(r"/(\d{3})\b")),
        ))
        path = "/".join(str(n) for n in range(1000, 1020))
        components = parse_url_components(f"https://x.com/{path}?sku=abcdef")
        result = extract_ids_from_url_components(components, registry=registry)
        assert len(result) == 12
        assert result == tuple(sorted(result))

    def test_gap_alias(self):
        components = parse_url_components("https://oldnavy.gap.com/browse/product.do?pid=123456")
        assert extract_ids_from_url_components(components) == ("123456",)

    def test_store_search_pattern(self):
        components = parse_url_components(
            "https://www.acehardware.com/departments/tools/8061802?variationProductCode=7008474"
        )
        assert extract_ids_from_url_components(components) == ("7008474", "8061802")

    def test_invalid_components(self):
        with pytest.raises(InvalidInput):
            extract_ids_from_url_components("https://nike.com/t/x")

    def test_invalid_store_id(self):
        components = parse_url_components("https://nike.com/t/x")
        with pytest.raises(InvalidInput):
            extract_ids_from_url_components(components, store_id="")
        with pytest.raises(InvalidInput):
            extract_ids_from_url_components(components, store_id="9" * 101)
        with pytest.raises(InvalidInput):
            extract_ids_from_url_components(components, store_id=9528)

    def test_long_pathname_keeps_search(self):
        """pathname が長すぎても search パターンの結果は残ること."""
        components = parse_url_components("https://example.com/" + "a" * 10050 + "?sku=abcd1234")
        assert extract_ids_from_url_components(components) == ("abcd1234",)

    def test_long_pathname_store_patterns(self):
        registry = _registry(StoreConfig(id="1", domain="x.com", pathname_patterns=(_ascii(r"/p/(\d{6})"),)))
        components = parse_url_components("https://x.com/p/123456/" + "b" * 10050)
        assert extract_ids_from_url_components(components, registry=registry) == ("123456",)

    def test_lookup_error_contained(self, development, caplog):
        """ストア検索中の例外は外に出さないこと."""
        caplog.set_level(logging.ERROR, logger="product_id_extractor.extractor")
        registry = MagicMock()
        registry.get.side_effect = RuntimeError("registry down")
        components = parse_url_components("https://x.com/p/123/prod-1234567")

        assert extract_ids_from_url_components(components, registry=registry) == ()
        assert "registry down" in caplog.text

    def test_error_log_omits_href(self, development, caplog):
        """エラーログには URL 本体ではなく長さだけを出すこと."""
        caplog.set_level(logging.ERROR, logger="product_id_extractor.extractor")
        registry = MagicMock()
        registry.get.side_effect = RuntimeError("registry down")
        long_path = "c" * 5000
        components = parse_url_components(f"https://x.com/{long_path}")

        extract_ids_from_url_components(components, registry=registry)

        assert f"href_length={len(components.href)}" in caplog.text
        assert long_path not in caplog.text


class TestOutputProperties:
    """出力の性質 (決定性・上限・形式) のテスト."""

    URLS = [
        "https://www.nike.com/t/air-max-90-mens-shoes-6n8tkb/cn8490-100",
        "https://www.target.com/p/some-product/-/A-12345678",
        "https://www.samsclub.com/p/some-product/prod21380133",
        "https://www.kohls.com/product/prd-5731234/some-shirt.jsp?skuId=98765432",
        "https://oldnavy.gap.com/browse/product.do?pid=123456&vid=1",
        "https://shop.example.com/prod6272927/prd5252028/p62818712/prod-62926242",
        "https://example.com/search?q=shoes",
    ]

    def test_deterministic(self):
        for url in self.URLS:
            assert extract_ids_from_url(url) == extract_ids_from_url(url)

    def test_bounded_and_sorted(self):
        for url in self.URLS:
            result = extract_ids_from_url(url)
            assert len(result) <= 12
            assert list(result) == sorted(set(result))
            for id_ in result:
                assert _ID_FORMAT.match(id_), id_


class TestExtractIdsFromUrl:
    """extract_ids_from_url のテスト."""

    def test_target(self):
        assert extract_ids_from_url("https://www.target.com/p/some-product/-/A-12345678") == (
            "12345678",
        )

    def test_numeric_store_id(self):
        registry = _registry(StoreConfig(id="42", domain="x.com", pathname_patterns=(_ascii(r"/a/(\w{4})"),)))
        assert extract_ids_from_url("https://y.com/a/abcd", store_id=42, registry=registry) == ("abcd",)

    def test_blank_store_id_falls_back_to_domain(self):
        assert extract_ids_from_url(
            "https://www.target.com/p/x/-/A-12345678", store_id="  "
        ) == ("12345678",)


class TestValidateProductIds:
    """validate_product_ids のテスト."""

    def test_valid(self):
        assert validate_product_ids(["a", "b-1", "c_2"]) == ("a", "b-1", "c_2")

    def test_too_long(self):
        with pytest.raises(ValidationError):
            validate_product_ids(["a" * 25])

    def test_empty_id(self):
        with pytest.raises(ValidationError):
            validate_product_ids([""])

    def test_too_many(self):
        with pytest.raises(ValidationError):
            validate_product_ids([str(n) for n in range(13)])
