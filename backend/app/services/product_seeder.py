"""
种子数据导入 - 从远程 JSON 数据集一次性填充 products 集合
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import requests
from pymongo.errors import BulkWriteError, DuplicateKeyError

from app.models.product import InvalidProduct, Product

logger = logging.getLogger(__name__)

DUPLICATE_KEY_CODE = 11000

SEEDED = 'seeded'
SKIPPED = 'skipped'
DUPLICATE = 'duplicate'
FAILED = 'failed'


@dataclass
class SeedResult:
    status: str
    inserted: int = 0
    invalid: int = 0
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.status != FAILED


def _only_duplicates(exc: BulkWriteError) -> bool:
    errors = exc.details.get('writeErrors', [])
    return bool(errors) and all(err.get('code') == DUPLICATE_KEY_CODE for err in errors)


def build_documents(items: List[Any]) -> Tuple[List[Dict[str, Any]], int]:
    """Map raw dataset items to documents, dropping the ones that fail validation."""
    documents = []
    invalid = 0
    for index, item in enumerate(items):
        try:
            documents.append(Product.from_source(item).to_dict())
        except InvalidProduct as e:
            invalid += 1
            logger.warning("Skipping dataset item #%d: %s", index, e)
    return documents, invalid


class ProductSeeder:
    """Fetches the remote dataset and bulk-inserts it once."""

    def __init__(self, repository, source_url: str, timeout: float = 15, session=None):
        self.repository = repository
        self.source_url = source_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_dataset(self) -> List[Any]:
        response = self.session.get(self.source_url, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array from {self.source_url}, got {type(data).__name__}")
        return data

    def seed(self) -> SeedResult:
        """Populate the collection unless it already holds products.

        Never raises: failures come back as a ``failed`` result after being logged.
        """
        try:
            if self.repository.has_products():
                logger.info("Database is already seeded. Skipping seeding process.")
                return SeedResult(SKIPPED, message='Database already contains product data.')

            items = self.fetch_dataset()
            documents, invalid = build_documents(items)
            inserted = self.repository.insert_many(documents)
            logger.info("Database seeded with %d products (%d invalid skipped).", inserted, invalid)
            return SeedResult(SEEDED, inserted=inserted, invalid=invalid,
                              message=f'Database initialized with {inserted} products.')
        except BulkWriteError as e:
            if not _only_duplicates(e):
                logger.error("Error during seeding process: %s", e.details)
                return SeedResult(FAILED, message='Error during seeding process.')
            inserted = e.details.get('nInserted', 0)
            logger.warning("Duplicate records found, skipped %d of them.", len(e.details['writeErrors']))
            return SeedResult(DUPLICATE, inserted=inserted,
                              message=f'Duplicate records skipped; {inserted} products inserted.')
        except DuplicateKeyError:
            logger.warning("Duplicate record found, skipping the insertion.")
            return SeedResult(DUPLICATE, message='Duplicate records skipped.')
        except Exception:
            logger.exception("Error during seeding process")
            return SeedResult(FAILED, message='Error during seeding process.')
