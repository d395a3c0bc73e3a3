"""
产品过滤器 - 把查询参数翻译成 MongoDB 聚合阶段

Each stage factory is a plain function returning one aggregation stage (or
query document). ``PipelineBuilder`` composes them under names so callers can
add stages conditionally and inspect what was built.
"""

import re
from math import isfinite
from typing import Any, Dict, List, Optional, Tuple

# $bucket 价格区间边界（下界包含，上界不包含）
PRICE_BOUNDARIES = [0, 101, 201, 301, 401, 501, 601, 701, 801, 901]
PRICE_OVERFLOW_BUCKET = '901+'

Stage = Dict[str, Any]


class PipelineBuilder:
    """Ordered collection of named aggregation stages."""

    def __init__(self):
        self._stages: List[Tuple[str, Stage]] = []

    def add(self, name: str, stage: Optional[Stage]) -> 'PipelineBuilder':
        """Append a stage; ``None`` is ignored so optional filters chain cleanly."""
        if stage is not None:
            self._stages.append((name, stage))
        return self

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self._stages]

    def build(self) -> List[Stage]:
        return [stage for _, stage in self._stages]


def month_expr(month: int) -> Stage:
    """$expr comparing the month of dateOfSale, ignoring the year."""
    return {'$expr': {'$eq': [{'$month': '$dateOfSale'}, month]}}


def month_match(month: Optional[int]) -> Optional[Stage]:
    if month is None:
        return None
    return {'$match': month_expr(month)}


def parse_price_search(search: str) -> Optional[float]:
    """Return the search text as a price when it is a finite number."""
    try:
        value = float(search)
    except (TypeError, ValueError):
        return None
    return value if isfinite(value) else None


def search_match(search: str) -> Optional[Stage]:
    """Substring match on title/description, plus a [n, n+1) price window for numbers."""
    if not search:
        return None

    pattern = {'$regex': re.escape(search), '$options': 'i'}
    conditions: List[Stage] = [
        {'title': pattern},
        {'description': pattern},
    ]

    price = parse_price_search(search)
    if price is not None:
        conditions.append({'price': {'$gte': price, '$lt': price + 1}})

    return {'$match': {'$or': conditions}}


def skip_stage(page: int, per_page: int) -> Stage:
    return {'$skip': (page - 1) * per_page}


def limit_stage(per_page: int) -> Stage:
    return {'$limit': per_page}


def total_count_filter(month: Optional[int]) -> Stage:
    """Filter used for the listing total.

    Only the month narrows the count; the search text does not.
    """
    if month is None:
        return {}
    return month_expr(month)


def build_transactions_pipeline(page: int, per_page: int,
                                search: str = '', month: Optional[int] = None) -> PipelineBuilder:
    return (
        PipelineBuilder()
        .add('month', month_match(month))
        .add('search', search_match(search))
        .add('skip', skip_stage(page, per_page))
        .add('limit', limit_stage(per_page))
    )


def _sold_sum(value: Any, sold: bool = True) -> Stage:
    return {'$sum': {'$cond': [{'$eq': ['$sold', sold]}, value, 0]}}


def build_sales_pipeline(month: int) -> PipelineBuilder:
    return (
        PipelineBuilder()
        .add('month', month_match(month))
        .add('totals', {
            '$group': {
                '_id': None,
                'totalSaleAmount': _sold_sum('$price'),
                'totalSoldItems': _sold_sum(1),
                'totalNotSoldItems': _sold_sum(1, sold=False),
            }
        })
        .add('project', {
            '$project': {
                '_id': 0,
                'totalSaleAmount': 1,
                'totalSoldItems': 1,
                'totalNotSoldItems': 1,
            }
        })
    )


def build_price_range_pipeline(month: int) -> PipelineBuilder:
    return (
        PipelineBuilder()
        .add('month', month_match(month))
        .add('buckets', {
            '$bucket': {
                'groupBy': '$price',
                'boundaries': list(PRICE_BOUNDARIES),
                'default': PRICE_OVERFLOW_BUCKET,
                'output': {'count': {'$sum': 1}},
            }
        })
    )


def build_category_pipeline(month: int) -> PipelineBuilder:
    return (
        PipelineBuilder()
        .add('month', month_match(month))
        .add('group', {'$group': {'_id': '$category', 'itemCount': {'$sum': 1}}})
        .add('project', {'$project': {'_id': 0, 'category': '$_id', 'itemCount': 1}})
    )
