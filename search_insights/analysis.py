"""検索結果の集計モジュール.

処理フロー:
  1. 各商品のバッジから Stats を算出（enrich）
  2. 売上トップ商品を選出
  3. キーワード・店舗・商品タイプごとに集計
  4. レスポンスに組み立て
"""

from __future__ import annotations

import math

from search_insights.config import UNKNOWN_STORE
from search_insights.models import (
    EnrichedProduct,
    KeywordCount,
    ProductTypeCount,
    SearchReport,
    Stats,
    StoreSummary,
)

# (badge type, 値のキー)
SALES_BADGE = ("BoughtXTimesInMonth", "orderItemCount")
VIEWS_BADGE = ("XViewsInMonth", "viewCount")
CARTS_BADGE = ("InXCarts", "cartCount")

KEYWORD_DELIMITER = "+"


def get_badge_value(product: dict, badge_type: str, value_key: str):
    """type が一致する最初のバッジから値を取り出す.

    Returns:
        バッジの値。バッジが無い・一致しない場合は None。
    """
    badges = product.get("badges")
    if not isinstance(badges, list):
        return None
    for badge in badges:
        if isinstance(badge, dict) and badge.get("type") == badge_type:
            return badge.get(value_key)
    return None


def _to_number(value) -> float | int:
    """数値化できない値は 0 として扱う."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


def _to_count(value) -> int:
    return max(int(_to_number(value)), 0)


def enrich_product(product: dict) -> EnrichedProduct:
    """バッジから sales / views / carts / conversionRate を算出する."""
    sales = _to_count(get_badge_value(product, *SALES_BADGE))
    views = _to_count(get_badge_value(product, *VIEWS_BADGE))
    carts = _to_count(get_badge_value(product, *CARTS_BADGE))
    conversion_rate = (sales / views) * 100 if views > 0 else 0.0

    return EnrichedProduct(
        product=dict(product),
        stats=Stats(
            sales=sales,
            views=views,
            carts=carts,
            conversion_rate=conversion_rate,
        ),
    )


def enrich_products(products: list[dict]) -> list[EnrichedProduct]:
    return [enrich_product(p) for p in products]


def select_top_product(products: list[EnrichedProduct]) -> EnrichedProduct | None:
    """sales 最大の商品を返す. 同数の場合は先に現れたもの."""
    return max(products, key=lambda p: p.stats.sales, default=None)


def aggregate_keywords(products: list[EnrichedProduct]) -> list[KeywordCount]:
    """全商品のキーワードを出現回数順に集計する."""
    counts: dict[str, int] = {}
    for p in products:
        keywords = p.product.get("keywords")
        if not keywords or not isinstance(keywords, str):
            continue
        for kw in keywords.split(KEYWORD_DELIMITER):
            term = kw.strip()
            if term:
                counts[term] = counts.get(term, 0) + 1

    # sorted は安定ソートなので同数は初出順のまま
    return [
        KeywordCount(term=term, count=count)
        for term, count in sorted(counts.items(), key=lambda kv: -kv[1])
    ]


def aggregate_stores(products: list[EnrichedProduct]) -> list[StoreSummary]:
    """店舗ごとに商品数・売上・価格を集計し、売上順に並べる."""
    # name -> {"product_count", "total_sales", "total_price"}
    stores: dict[str, dict] = {}
    for p in products:
        name = p.product.get("storeName") or UNKNOWN_STORE
        store = stores.setdefault(name, {"product_count": 0, "total_sales": 0, "total_price": 0})
        store["product_count"] += 1
        store["total_price"] += _to_number(p.product.get("price"))
        store["total_sales"] += p.stats.sales

    summaries = [
        StoreSummary(
            name=name,
            product_count=s["product_count"],
            total_sales=s["total_sales"],
            total_price=s["total_price"],
            average_price=(
                s["total_price"] / s["product_count"] if s["product_count"] > 0 else 0
            ),
        )
        for name, s in stores.items()
    ]
    return sorted(summaries, key=lambda s: -s.total_sales)


def aggregate_product_types(products: list[EnrichedProduct]) -> list[ProductTypeCount]:
    """商品タイプごとの件数. productType が無い商品は数えない."""
    counts: dict[str, int] = {}
    for p in products:
        product_type = p.product.get("productType")
        if product_type and isinstance(product_type, str):
            counts[product_type] = counts.get(product_type, 0) + 1

    return [
        ProductTypeCount(type=t, count=count)
        for t, count in sorted(counts.items(), key=lambda kv: -kv[1])
    ]


def build_report(products: list[dict], num_recs: int | None = 0) -> SearchReport:
    """検索 API の商品リストから SearchReport を組み立てる."""
    enriched = enrich_products(products)
    return SearchReport(
        products=enriched,
        top_product=select_top_product(enriched),
        keywords=aggregate_keywords(enriched),
        stores=aggregate_stores(enriched),
        product_types=aggregate_product_types(enriched),
        saturation=num_recs or 0,
    )
