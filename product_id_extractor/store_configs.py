"""ストア別の商品 ID 抽出設定.

URL は照合前に小文字化されるため、パターンのリテラルは小文字で書く。
パターンの書き方のルールは patterns.py を参照。
"""

from __future__ import annotations

import re

from product_id_extractor.models import StoreAlias, StoreConfig


def _p(source: str) -> re.Pattern:
    return re.compile(source, re.ASCII)


# .html の直前の英数字 ID (5 文字以上)
_HTML_WORD_ID = r"\b(\w{5,24})\.html"

STORE_CONFIGS: tuple[StoreConfig, ...] = (
    StoreConfig(
        id="5246",
        domain="target.com",
        pathname_patterns=(_p(r"\ba-(\d{6,24})\b"),),
    ),
    # /t/{slug}-{スタイルコード}/{カラーコード}
    # 例: /t/air-max-90-mens-shoes-6n8tkb/cn8490-100
    StoreConfig(
        id="9528",
        domain="nike.com",
        pathname_patterns=(
            _p(r"/(\w{6,16}-\w{3})\b"),
            _p(r"-(\w{6})/(\w{6,16}-\w{3})\b"),
        ),
    ),
    StoreConfig(
        id="4207",
        domain="ulta.com",
        pathname_patterns=(_p(r"\b((?:pimprod|xlsimpprod|\d){6,24})\b"),),
    ),
    StoreConfig(
        id="8378",
        domain="qvc.com",
        pathname_patterns=(_p(r"\bproduct\.(\w{6,24})\.html"),),
    ),
    StoreConfig(
        id="2524",
        domain="zappos.com",
        pathname_patterns=(_p(r"/asin/(\w{6,24})\b"),),
    ),
    StoreConfig(
        id="2946",
        domain="walmart.com",
        pathname_patterns=(_p(r"/ip/[\w-]+/(\d{6,24})\b"),),
    ),
    # /ip/seort/16675013342, /ip/slug/prod24921152, /p/slug/p03002770
    StoreConfig(
        id="10086",
        domain="samsclub.com",
        pathname_patterns=(_p(r"/(?:ip|p)/[\w-]+/(\w{6,24})\b"),),
        # 先頭の prod / p を外して数字だけにする
        transform_id=lambda id_: re.sub(r"^(?:prod|p)", "", id_),
    ),
    StoreConfig(
        id="3864",
        domain="gap.com",
        aliases=(
            StoreAlias(id="13943", domain="gapfactory.com"),
            StoreAlias(id="3726", domain="oldnavy.gap.com"),
            StoreAlias(id="9311", domain="bananarepublic.gap.com"),
            StoreAlias(id="15061", domain="bananarepublicfactory.gapfactory.com"),
            StoreAlias(id="10168", domain="athleta.gap.com"),
        ),
    ),
    StoreConfig(
        id="12205",
        domain="saksoff5th.com",
        pathname_patterns=(_p(r"\b(\d{6,24})\.html"),),
    ),
    StoreConfig(
        id="13467",
        domain="hm.com",
        pathname_patterns=(_p(r"\bproductpage\.(\d{6,16})\.html"),),
    ),
    StoreConfig(
        id="16788",
        domain="chewy.com",
        pathname_patterns=(_p(r"\bdp/(\w{6,24})\b"),),
    ),
    StoreConfig(
        id="9141",
        domain="anntaylor.com",
        pathname_patterns=(
            _p(r"\bgrp_(\d{4,16})_\d{1,8}\.html"),
            _p(r"\bgrp_([\d_]{4,16})\.html"),
        ),
    ),
    StoreConfig(
        id="9205",
        domain="love-scent.com",
        pathname_patterns=(_p(r"\b(p-\d{1,16})\.html"),),
        transform_id=lambda id_: id_.replace("p-", "sku-", 1),
    ),
    StoreConfig(
        id="8973",
        domain="ikea.com",
        pathname_patterns=(_p(r"\b(\w{1,16})$"),),
        transform_id=lambda id_: id_.replace("s", "", 1),
    ),
    StoreConfig(
        id="20571",
        domain="magneticme.com",
        pathname_patterns=(_p(r"/([\w-]{4,24})$"),),
        transform_id=lambda id_: id_.replace("_", "-", 1),
    ),
    StoreConfig(
        id="16016",
        domain="mountainwarehouse.com",
        pathname_patterns=(_p(r"-p(\d{4,16})\.aspx"),),
    ),
    StoreConfig(
        id="9898",
        domain="labseries.com",
        pathname_patterns=(_p(r"/product/\d+/(\d{4,16})/"),),
    ),
    StoreConfig(
        id="22077",
        domain="theinside.com",
        pathname_patterns=(_p(r"\b(\d{5,16})$"),),
    ),
    StoreConfig(
        id="10045",
        domain="smashbox.com",
        pathname_patterns=(_p(r"\bproduct/\d+/(\d{5,16})/"),),
    ),
    # ID の形式: xxx0000__x__000, xxx0000__x__000_, xx0000
    StoreConfig(
        id="14393",
        domain="rockyboots.com",
        pathname_patterns=(
            _p(r"\b(\w{1,24})\.html"),
            _p(r"/(\w{1,5}\d{3,8})(?:_|\b)"),
        ),
    ),
    # ID の形式: xx0000, xxxxxx
    StoreConfig(
        id="4690",
        domain="maidenform.com",
        pathname_patterns=(_p(r"/(\w{5,24})$"),),
    ),
    StoreConfig(
        id="16522",
        domain="kathykuohome.com",
        pathname_patterns=(_p(r"\bproduct/detail/(\d{3,24})\b"),),
    ),
    StoreConfig(
        id="16274",
        domain="fairwaygolfusa.com",
        pathname_patterns=(_p(r"\bpid/(\d{3,24})$"),),
    ),
    StoreConfig(
        id="18859",
        domain="drmartens.com",
        pathname_patterns=(_p(r"\bp/(\w{5,24})$"),),
    ),
    StoreConfig(
        id="4489",
        domain="famousfootwear.com",
        pathname_patterns=(
            _p(r"-(\d{5,24})/\b"),
            _p(r"\b(\d{5,24})$"),
        ),
    ),
    StoreConfig(
        id="10269",
        domain="care.com",
        pathname_patterns=(_p(r"\b(\d{4,24})-"),),
    ),
    StoreConfig(
        id="9428",
        domain="ae.com",
        pathname_patterns=(_p(r"(?:/p/|\b)([\d_]{4,24})$"),),
    ),
    StoreConfig(
        id="12539",
        domain="zoro.com",
        pathname_patterns=(_p(r"\b(\w{5,24})$"),),
    ),
    StoreConfig(
        id="2445",
        domain="westelm.com",
        pathname_patterns=(_p(r"-(\w{5,24})$"),),
    ),
    StoreConfig(
        id="13957",
        domain="uniqlo.com",
        pathname_patterns=(_p(r"\bproducts/([\w-]{5,24})/"),),
    ),
    StoreConfig(
        id="2302",
        domain="rei.com",
        pathname_patterns=(_p(r"\bproduct/(\d{5,24})/"),),
    ),
    StoreConfig(
        id="2440",
        domain="dickssportinggoods.com",
        pathname_patterns=(_p(r"/(\w{4,24})$"),),
    ),
    StoreConfig(
        id="2442",
        domain="crateandbarrel.com",
        pathname_patterns=(_p(r"/s(\w{4,24})$"),),
    ),
    StoreConfig(
        id="4767",
        domain="bestbuy.com",
        pathname_patterns=(_p(r"\b(\d{4,24})\.p$"),),
    ),
    StoreConfig(
        id="5487",
        domain="adidas.com",
        pathname_patterns=(_p(r"\b(\w{6,24})\.html"),),
    ),
    StoreConfig(id="8980", domain="katespade.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(
        id="8979",
        domain="journeys.com",
        pathname_patterns=(_p(r"-(\d{4,24})$"),),
    ),
    StoreConfig(
        id="8978",
        domain="josbank.com",
        pathname_patterns=(_p(r"-(\w{4,24})$"),),
    ),
    StoreConfig(
        id="8976",
        domain="jcpenney.com",
        pathname_patterns=(_p(r"/product/(\w{4,24})$"),),
    ),
    StoreConfig(
        id="8981",
        domain="kirklands.com",
        pathname_patterns=(_p(r"\b(\d{6,24})\.uts"),),
    ),
    StoreConfig(
        id="8031",
        domain="rugsusa.com",
        pathname_patterns=(_p(r"\b([\w-]{6,24})\.html"),),
    ),
    StoreConfig(id="16000", domain="funko.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(id="22484", domain="loungefly.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(
        id="8972",
        domain="iherb.com",
        pathname_patterns=(_p(r"\b(\d{5,24})$"),),
    ),
    StoreConfig(
        id="8970",
        domain="houzz.com",
        pathname_patterns=(_p(r"\b(\d{5,24})$"),),
    ),
    StoreConfig(
        id="8963",
        domain="harryanddavid.com",
        pathname_patterns=(_p(r"\b(\d{5,24})$"),),
    ),
    StoreConfig(
        id="12621",
        domain="golfgalaxy.com",
        pathname_patterns=(_p(r"\b(\w{5,24})$"),),
    ),
    StoreConfig(
        id="10228",
        domain="discountschoolsupply.com",
        pathname_patterns=(_p(r"\bp/(\w{4,24})$"),),
    ),
    StoreConfig(
        id="22043",
        domain="cuisinart.com",
        pathname_patterns=(_p(r"\b([\w-]{4,24})\.html"),),
    ),
    StoreConfig(
        id="8965",
        domain="healthypets.com",
        pathname_patterns=(_p(r"\b(\d{5,24})\.html"),),
    ),
    StoreConfig(
        id="19196",
        domain="circusny.com",
        pathname_patterns=(_p(r"(?:\b|-)(\w{5,24})$"),),
    ),
    # -{数字}-{色コード} 例: /p/girls-denim-jeans-3012345-01
    StoreConfig(
        id="8933",
        domain="childrensplace.com",
        pathname_patterns=(_p(r"-(\d{5,12}-\w{2,11})$"),),
    ),
    StoreConfig(
        id="8962",
        domain="harborfreight.com",
        pathname_patterns=(_p(r"\b(\d{5,24})\.html"),),
    ),
    StoreConfig(id="9609", domain="champssports.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(id="16829", domain="costco.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(id="19490", domain="acmemarkets.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(id="2144", domain="charlestyrwhitt.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(id="10530", domain="teva.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(id="18125", domain="stories.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(
        id="16349",
        domain="baggallini.com",
        pathname_patterns=(_p(r"\b([\w-]{2,24})\.html"),),
    ),
    StoreConfig(
        id="20026",
        domain="arlo.com",
        pathname_patterns=(_p(r"\b([\w-]{5,24})\.html"),),
    ),
    StoreConfig(id="2880", domain="wayfair.com", pathname_patterns=(_p(_HTML_WORD_ID),)),
    StoreConfig(
        id="22489",
        domain="lodgecastiron.com",
        pathname_patterns=(_p(r"\b([\w-]{4,24})\.html"),),
    ),
    StoreConfig(
        id="8442",
        domain="stacyadams.com",
        pathname_patterns=(_p(r"\b([\w-]{4,24})\.html"),),
    ),
    StoreConfig(
        id="15159",
        domain="1stoplighting.com",
        pathname_patterns=(_p(r"_([\w-]{1,24})\.htm"),),
    ),
    StoreConfig(
        id="6326",
        domain="lillianvernon.com",
        pathname_patterns=(_p(r"\b(\w{4,24})\.html"),),
    ),
    StoreConfig(
        id="9443",
        domain="kiehls.com",
        pathname_patterns=(_p(r"\b(\w{3,24})\.html"),),
    ),
    StoreConfig(
        id="8380",
        domain="lampsplus.com",
        pathname_patterns=(_p(r"__(\w{4,24})\.html"),),
    ),
    StoreConfig(
        id="16449",
        domain="campchef.com",
        pathname_patterns=(_p(r"\b([\w-]{4,24})\.html"),),
    ),
    StoreConfig(
        id="14991",
        domain="boohooman.com",
        pathname_patterns=(_p(r"\b([\w-]{4,24})\.html"),),
    ),
    StoreConfig(
        id="10904",
        domain="haggar.com",
        pathname_patterns=(_p(r"\b(\d{4,24})\.html"),),
    ),
    StoreConfig(
        id="19546",
        domain="dancewearsolutions.com",
        pathname_patterns=(_p(r"\b(\d{4,24})\.aspx"),),
    ),
    StoreConfig(
        id="2447",
        domain="overstock.com",
        pathname_patterns=(_p(r"\b(\d{4,24})/product\.html"),),
    ),
    StoreConfig(
        id="10722",
        domain="lowes.com",
        pathname_patterns=(_p(r"\b(\d{4,24})$"),),
    ),
    StoreConfig(
        id="3865",
        domain="jcrew.com",
        pathname_patterns=(_p(r"\bp/(\w{4,24})$"),),
    ),
    # URL はスラッグのみで ID を含まない (例: /products/gymshark-arrival-t-shirt-black-ss22)
    StoreConfig(
        id="15861",
        domain="gymshark.com",
        aliases=(
            StoreAlias(id="15861", domain="us.shop.gymshark.com"),
            StoreAlias(id="15861", domain="ca.gymshark.com"),
            StoreAlias(id="15861", domain="uk.gymshark.com"),
        ),
    ),
    # v_{英数字} 形式 例: /p/slug/v_1t673110, /~/v_3t261510.html
    StoreConfig(
        id="10752",
        domain="carters.com",
        pathname_patterns=(_p(r"/(v_\w{6,12})(?:\.html|\b)"),),
    ),
    # パスの prd-{数字} を prefix 付き・数字のみの両方で取る。skuId は汎用パターンで取れる
    # 例: /product/prd-7692699/product-name.jsp?skuid=76565656
    StoreConfig(
        id="7206",
        domain="kohls.com",
        aliases=(StoreAlias(id="7206", domain="m.kohls.com"),),
        pathname_patterns=(
            _p(r"/product/(prd-\d{6,12})/"),
            _p(r"/product/prd-(\d{6,12})/"),
        ),
    ),
    # /product/8061802, /product/f001289, ?variationproductcode=7008474
    StoreConfig(
        id="8302",
        domain="acehardware.com",
        pathname_patterns=(_p(r"/product/(\w{4,12})\b"),),
        search_patterns=(_p(r"variationproductcode=(\d{4,12})\b"),),
    ),
    StoreConfig(
        id="13349",
        domain="nordstromrack.com",
        pathname_patterns=(_p(r"/s/(\d{4,24})(?:/|$)"),),
    ),
    # /p/endor-issue-ball-cap-2165511.html, /p/polo-1929591_fla.html
    StoreConfig(
        id="10437",
        domain="columbia.com",
        pathname_patterns=(_p(r"-([a-z\d]{6,15})(?:\.html|_)"),),
    ),
    # /products/{slug}/id_395103, /pp/stylepage-553141_a7.html
    StoreConfig(
        id="3866",
        domain="landsend.com",
        pathname_patterns=(
            _p(r"/id_(\d{5,8})"),
            _p(r"/pp/stylepage-(\d{5,8})_"),
        ),
    ),
)
