"""URL 正規化・ドメイン解決モジュール.

処理フロー:
  1. スキーム補完・https 強制
  2. ホスト名の小文字化、www. / ポート / 認証情報の除去
  3. パスの重複スラッシュ・末尾スラッシュ除去
  4. トラッキングパラメータ除去とクエリのソート
  5. ベースドメイン解決と URL キー生成
"""

from __future__ import annotations

import base64
import hashlib
import ipaddress
import re
from urllib.parse import quote, unquote_plus, urlsplit

import tldextract

from product_id_extractor.config import (
    ALLOWED_SCHEMES,
    DEFAULT_SCHEME,
    MAX_HOSTNAME_LENGTH,
    PRESERVED_SUBDOMAINS,
    TRACKING_PARAM_PREFIXES,
    TRACKING_PARAMS,
    URL_KEY_LENGTH,
)
from product_id_extractor.errors import (
    InvalidHostname,
    InvalidInput,
    UnsupportedScheme,
    UrlParseError,
)
from product_id_extractor.models import UrlComponents

# "https://" のようにオーソリティを伴うスキーム
_AUTHORITY_SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
# "mailto:" のようにオーソリティを持たないスキーム
_OPAQUE_SCHEME_PATTERN = re.compile(
    r"^(mailto|javascript|data|tel|sms|file|about|blob):", re.IGNORECASE
)
_HOST_LABEL_PATTERN = re.compile(r"^[a-z0-9_-]+$")
_DUPLICATE_SLASHES = re.compile(r"/{2,}")
_UNSAFE_KEY_CHARS = re.compile(r"[+/=]")

# 同梱の Public Suffix List を使う (実行時にダウンロードしない)
_TLD_EXTRACT = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


def parse_domain(hostname: str) -> str:
    """ホスト名からベースドメインを求める.

    www・m・地域コードなどのサブドメインは捨て、co.uk のような複数ラベルの
    TLD (Public Suffix List) と、oldnavy のようなブランドのサブドメインは残す。

    Args:
        hostname: ホスト名 (例: www.oldnavy.gap.com)

    Returns:
        ベースドメイン (例: oldnavy.gap.com)

    Raises:
        InvalidHostname: 空または形式が不正な場合
    """
    if not isinstance(hostname, str) or not hostname.strip():
        raise InvalidHostname(hostname, "空のホスト名")

    host = hostname.strip().lower().rstrip(".")
    if len(host) > MAX_HOSTNAME_LENGTH:
        raise InvalidHostname(hostname, "長すぎます")

    if _is_ip_address(host):
        return host

    labels = host.split(".")
    for label in labels:
        if not _HOST_LABEL_PATTERN.match(label):
            raise InvalidHostname(hostname, f"不正なラベル: {label!r}")

    # localhost のように登録可能ドメインがなければホスト名のまま
    base_domain = _TLD_EXTRACT(host).top_domain_under_public_suffix or host
    base_labels = base_domain.split(".")

    preserved = next((label for label in labels if label in PRESERVED_SUBDOMAINS), None)
    if preserved is None or preserved in base_labels:
        return base_domain

    return f"{preserved}.{base_domain}"


def _is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def create_url_key(base_key: str) -> str:
    """URL ごとの一意キーを生成する.

    sha1 の base64 表現を 16 文字に切り詰め、+ / = を _ に置き換える。
    同じ入力からは常に同じキーになる。

    Args:
        base_key: ハッシュ対象の文字列 (通常は domain+pathname+search)

    Returns:
        16 文字の URL セーフなキー
    """
    if not isinstance(base_key, str) or not base_key:
        raise InvalidInput("URL キーの元になる文字列が空です", {"base_key": base_key})

    digest = hashlib.sha1(base_key.encode("utf-8")).digest()
    encoded = base64.b64encode(digest).decode("ascii")[:URL_KEY_LENGTH]
    return _UNSAFE_KEY_CHARS.sub("_", encoded)


def normalize_url(url: str) -> str:
    """URL を正規化した文字列を返す.

    Raises:
        InvalidInput: 空文字列の場合
        UnsupportedScheme: HTTP(S) 以外のスキームの場合
        UrlParseError: URL として解釈できない場合
    """
    return parse_url_components(url).href


def parse_url_components(url: str) -> UrlComponents:
    """URL を正規化して構成要素に分解する.

    Args:
        url: 任意の商品ページ・カート URL

    Returns:
        UrlComponents。パースに失敗した場合に部分的な値を返すことはない。

    Raises:
        InvalidInput: 空文字列の場合
        UnsupportedScheme: HTTP(S) 以外のスキームの場合
        UrlParseError: URL として解釈できない場合
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidInput("URL は空でない文字列で指定してください", {"url": url})

    hostname, path, query = _normalize_parts(url.strip())

    try:
        domain = parse_domain(hostname)
    except InvalidHostname as e:
        raise UrlParseError(url, e.message) from e

    pathname = path or "/"
    search = f"?{query}" if query else ""
    # IPv6 アドレスは角括弧で囲む
    authority = f"[{hostname}]" if ":" in hostname else hostname
    href = f"{DEFAULT_SCHEME}://{authority}{path}{search}"

    return UrlComponents(
        href=href,
        hostname=hostname,
        pathname=pathname,
        search=search,
        domain=domain,
        key=create_url_key(f"{domain}{pathname}{search}"),
        original=url,
        encoded_href=quote(href, safe="!~*'()"),
    )


def _normalize_parts(url: str) -> tuple[str, str, str]:
    """URL を (ホスト名, パス, クエリ) に正規化する. 全て小文字."""
    try:
        parts = urlsplit(_ensure_scheme(url))
        scheme = parts.scheme.lower()
        if scheme not in ALLOWED_SCHEMES:
            raise UnsupportedScheme(url, scheme)
        _ = parts.port  # 不正なポート番号はここで ValueError になる
    except UrlParseError:
        raise
    except ValueError as e:
        raise UrlParseError(url, str(e)) from e

    hostname = _normalize_hostname(url, parts.hostname or "")
    path = _normalize_path(parts.path.lower())
    query = _normalize_query(parts.query.lower())
    return hostname, path, query


def _ensure_scheme(url: str) -> str:
    """スキームがなければ https を補う."""
    if url.startswith("//"):
        return f"{DEFAULT_SCHEME}:{url}"
    if _AUTHORITY_SCHEME_PATTERN.match(url):
        return url

    opaque = _OPAQUE_SCHEME_PATTERN.match(url)
    if opaque:
        raise UnsupportedScheme(url, opaque.group(1).lower())
    return f"{DEFAULT_SCHEME}://{url}"


def _normalize_hostname(url: str, hostname: str) -> str:
    host = hostname.lower().rstrip(".")
    if not host:
        raise UrlParseError(url, "ホスト名がありません")

    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise UrlParseError(url, "ホスト名を IDNA に変換できません") from e

    # www. の後にドメインが残る場合のみ除去 (www.com はそのまま)
    if host.startswith("www.") and "." in host[4:]:
        host = host[4:]
    return host


def _normalize_path(path: str) -> str:
    """重複スラッシュと末尾スラッシュを除去する. ルートは空文字になる."""
    return _DUPLICATE_SLASHES.sub("/", path).rstrip("/")


def _normalize_query(query: str) -> str:
    """トラッキングパラメータを除き、キー順に並べ替える.

    値はデコード・再エンコードせずにそのまま残す。
    """
    segments = [segment for segment in query.split("&") if segment]
    kept = [s for s in segments if not _is_tracking_param(_param_name(s))]
    kept.sort(key=_param_name)
    return "&".join(kept)


def _param_name(segment: str) -> str:
    return segment.split("=", 1)[0]


def _is_tracking_param(name: str) -> bool:
    decoded = unquote_plus(name).lower()
    return decoded in TRACKING_PARAMS or decoded.startswith(TRACKING_PARAM_PREFIXES)
