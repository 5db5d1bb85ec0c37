"""データモデル定義.

JSON 出力はフロントエンドに合わせて camelCase。
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Stats:
    """バッジから算出した商品ごとの統計."""

    sales: int = 0  # 月間購入数 (BoughtXTimesInMonth)
    views: int = 0  # 月間閲覧数 (XViewsInMonth)
    carts: int = 0  # カート投入数 (InXCarts)
    conversion_rate: float = 0.0  # sales / views * 100

    def to_dict(self) -> dict:
        return {
            "sales": self.sales,
            "views": self.views,
            "carts": self.carts,
            "conversionRate": self.conversion_rate,
        }


@dataclass(frozen=True)
class EnrichedProduct:
    """検索 API の商品データ + Stats."""

    product: dict  # 検索 API の商品データ（そのまま保持）
    stats: Stats

    def to_dict(self) -> dict:
        return {**self.product, "stats": self.stats.to_dict()}


@dataclass(frozen=True)
class KeywordCount:
    term: str
    count: int

    def to_dict(self) -> dict:
        return {"term": self.term, "count": self.count}


@dataclass(frozen=True)
class StoreSummary:
    """店舗ごとの集計."""

    name: str
    product_count: int
    total_sales: int
    total_price: float
    average_price: float

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "productCount": self.product_count,
            "totalSales": self.total_sales,
            "totalPrice": self.total_price,
            "averagePrice": self.average_price,
        }


@dataclass(frozen=True)
class ProductTypeCount:
    type: str
    count: int

    def to_dict(self) -> dict:
        return {"type": self.type, "count": self.count}


@dataclass(frozen=True)
class SearchReport:
    """API レスポンス全体."""

    products: list[EnrichedProduct]
    top_product: EnrichedProduct | None
    keywords: list[KeywordCount] = field(default_factory=list)
    stores: list[StoreSummary] = field(default_factory=list)
    product_types: list[ProductTypeCount] = field(default_factory=list)
    saturation: int = 0  # 検索 API の総ヒット数 (numRecs)

    def to_dict(self) -> dict:
        return {
            "products": [p.to_dict() for p in self.products],
            "topProduct": self.top_product.to_dict() if self.top_product else None,
            "analysis": {
                "keywords": [k.to_dict() for k in self.keywords],
                "stores": [s.to_dict() for s in self.stores],
                "productTypes": [t.to_dict() for t in self.product_types],
            },
            "market": {
                "saturation": self.saturation,
            },
        }
