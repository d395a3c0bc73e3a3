"""
产品数据仓库 - 对 MongoDB products 集合的薄封装
"""

from typing import Any, Dict, List


class ProductRepository:
    """Read/seed access to the products collection.

    Holds a pymongo ``Collection`` handed in by the application factory;
    nothing here opens connections on its own.
    """

    def __init__(self, collection):
        self.collection = collection

    def has_products(self) -> bool:
        """是否已存在任意产品记录"""
        return self.collection.find_one({}, projection={'_id': 1}) is not None

    def insert_many(self, documents: List[Dict[str, Any]]) -> int:
        """批量写入；unordered 以便重复键之外的记录仍能写入"""
        if not documents:
            return 0
        result = self.collection.insert_many(documents, ordered=False)
        return len(result.inserted_ids)

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return list(self.collection.aggregate(pipeline))

    def count(self, query: Dict[str, Any]) -> int:
        return self.collection.count_documents(query)
