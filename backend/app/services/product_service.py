"""
产品服务 - 交易列表与月度统计

ProductService is bound to a ProductRepository; all filtering and aggregation
runs inside MongoDB through the pipelines built in product_filters.
"""

from typing import Any, Dict, List, Optional

from app.models.product import Product
from . import product_filters as filters

EMPTY_SALES_SUMMARY = {
    'totalSaleAmount': 0,
    'totalSoldItems': 0,
    'totalNotSoldItems': 0,
}


class ProductService:
    """产品服务类"""

    def __init__(self, repository):
        self.repository = repository

    def list_transactions(self, page: int = 1, per_page: int = 10,
                          search: str = '', month: Optional[int] = None) -> Dict[str, Any]:
        """分页列出交易，可按月份和关键词（标题/描述/价格）过滤

        ``total`` counts the month filter only, not the search text.
        """
        pipeline = filters.build_transactions_pipeline(page, per_page, search=search, month=month)
        products = self.repository.aggregate(pipeline.build())
        total = self.repository.count(filters.total_count_filter(month))

        return {
            'total': total,
            'page': page,
            'perPage': per_page,
            'products': [Product.serialize(doc) for doc in products],
        }

    def get_sales_summary(self, month: int) -> Dict[str, Any]:
        """月度销售额、已售与未售数量"""
        stats = self.repository.aggregate(filters.build_sales_pipeline(month).build())
        if not stats:
            return dict(EMPTY_SALES_SUMMARY)
        return {**EMPTY_SALES_SUMMARY, **stats[0]}

    def get_price_ranges(self, month: int) -> List[Dict[str, Any]]:
        """月度价格区间直方图"""
        return self.repository.aggregate(filters.build_price_range_pipeline(month).build())

    def get_category_breakdown(self, month: int) -> List[Dict[str, Any]]:
        """月度各分类商品数量"""
        return self.repository.aggregate(filters.build_category_pipeline(month).build())
