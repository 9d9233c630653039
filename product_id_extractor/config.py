"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- 実行環境 ---
APP_ENV_PRODUCTION = "production"


def is_production() -> bool:
    """本番環境かどうかを判定する.

    診断ログ（タイムアウト・上限到達など）は本番以外でのみ出力する。
    テストで切り替えられるよう、呼び出しの度に環境変数を読む。
    """
    return os.getenv("APP_ENV", "development").strip().lower() == APP_ENV_PRODUCTION


# --- パターン抽出 ---
PATTERN_EXTRACTOR_MAX_RESULTS = 12  # 減らすとテストに影響する
PATTERN_EXTRACTOR_TIMEOUT_MS = 100
TIMEOUT_CHECK_INTERVAL = 5  # 経過時間は 5 回に 1 回だけ確認する
MAX_SOURCE_LENGTH = 10000
MAX_STORE_ID_LENGTH = 100

# --- 商品 ID ---
PRODUCT_ID_MAX_LENGTH = 24
PRODUCT_ID_PATTERN = r"^[A-Za-z0-9_-]+$"

# --- URL キー ---
URL_KEY_LENGTH = 16

# --- URL 正規化 ---
DEFAULT_SCHEME = "https"
ALLOWED_SCHEMES = frozenset({"http", "https"})

# 完全一致で除去するトラッキングパラメータ
TRACKING_PARAMS = frozenset({
    # UTM・広告系
    "_ga", "gclid", "gclsrc", "_gl", "fbclid", "twclid", "t", "msclkid",
    # 汎用マーケティング
    "ref", "referral", "source", "campaign", "medium", "content", "term",
    # プラットフォーム固有
    "igshid", "mc_cid", "mc_eid", "_hsenc", "_hsmi", "_kx", "zanpid",
    "affid", "aff_id", "affiliate", "cjevent",
})

# 前方一致で除去するトラッキングパラメータ (utm_source, fb_action_ids など)
TRACKING_PARAM_PREFIXES = ("utm_", "fb_", "hsa_")

# --- ドメイン解決 ---
# 親ドメインを共有していても区別が必要なブランドのサブドメイン
PRESERVED_SUBDOMAINS = frozenset({
    "oldnavy",
    "bananarepublic",
    "athleta",
    "bananarepublicfactory",
    "gapfactory",
    "gap",
})

MAX_HOSTNAME_LENGTH = 253

# --- ログ ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs")))
