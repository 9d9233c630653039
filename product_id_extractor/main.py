"""商品 ID 抽出 — コマンドラインエントリーポイント.

処理フロー:
  1. 引数 (なければ標準入力の各行) から URL を受け取る
  2. URL ごとに正規化・商品 ID 抽出
  3. 結果を 1 行 1 JSON で標準出力に書く
  4. 件数・エラー数・所要時間をログに出す
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from typing import Iterable, TextIO

from product_id_extractor.config import LOG_DIR, LOG_LEVEL
from product_id_extractor.errors import ProductIdError
from product_id_extractor.extractor import extract_ids_from_url_components
from product_id_extractor.store_registry import coerce_store_id
from product_id_extractor.url_parser import parse_url_components


def setup_logging() -> None:
    """ロギングの初期設定. 標準出力は JSON 出力専用なのでログは標準エラーへ."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"product_id_extractor_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="product-id-extractor",
        description="商品ページ URL から商品 ID を抽出する",
    )
    parser.add_argument("urls", nargs="*", help="対象 URL (省略時は標準入力から 1 行ずつ)")
    parser.add_argument("--store-id", help="ストア ID (指定時はドメインより優先)")
    return parser.parse_args(argv)


def _read_urls(urls: list[str], stdin: TextIO) -> Iterable[str]:
    if urls:
        return urls
    return (line.strip() for line in stdin if line.strip())


def process_url(url: str, store_id: str | None = None) -> dict:
    """URL 1 件を処理して出力用の dict を返す.

    Raises:
        ProductIdError: URL・ストア ID が不正な場合
    """
    components = parse_url_components(url)
    product_ids = extract_ids_from_url_components(components, store_id=store_id)
    return {
        "url": components.href,
        "key": components.key,
        "domain": components.domain,
        "storeId": store_id,
        "productIds": list(product_ids),
    }


def run(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """メイン処理.

    Returns:
        終了コード。1 件でも失敗した URL があれば 1。
    """
    args = _parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logger = logging.getLogger(__name__)
    logger.info("=== 商品 ID 抽出 開始 ===")
    start_time = time.time()

    store_id = coerce_store_id(args.store_id)
    url_count = 0
    found_count = 0
    error_count = 0

    for url in _read_urls(args.urls, stdin):
        url_count += 1
        try:
            record = process_url(url, store_id)
        except ProductIdError as e:
            error_count += 1
            logger.warning("スキップ: url=%s, error=%s", url, e)
            record = {"url": url, "error": e.message}
        else:
            if record["productIds"]:
                found_count += 1
            logger.info("  %s → %s", record["url"], record["productIds"] or "ID なし")

        stdout.write(json.dumps(record, ensure_ascii=False) + "\n")

    # サマリ
    elapsed = time.time() - start_time
    logger.info("=== 商品 ID 抽出 完了 ===")
    logger.info("URL: %d 件, ID 抽出: %d 件, エラー: %d 件, 所要時間: %.3f 秒",
                url_count, found_count, error_count, elapsed)

    return 1 if error_count else 0


def main() -> None:
    setup_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
