"""
Shared fixtures: Flask app wired to an in-memory fake repository.

Run:
    cd <project-root>
    python -m pytest tests -v
"""

import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'backend'))

from app import create_app  # noqa: E402
from config import TestingConfig  # noqa: E402


class FakeRepository:
    """Records pipelines and count queries; returns canned results."""

    def __init__(self, aggregate_results=None, count_result=0, has_products=False):
        self.aggregate_results = list(aggregate_results or [])
        self.count_result = count_result
        self._has_products = has_products
        self.pipelines = []
        self.count_queries = []
        self.inserted = []
        self.insert_error = None
        self.aggregate_error = None

    def has_products(self):
        return self._has_products

    def insert_many(self, documents):
        if self.insert_error is not None:
            raise self.insert_error
        self.inserted.extend(documents)
        self._has_products = bool(self.inserted)
        return len(documents)

    def aggregate(self, pipeline):
        if self.aggregate_error is not None:
            raise self.aggregate_error
        self.pipelines.append(pipeline)
        return list(self.aggregate_results)

    def count(self, query):
        self.count_queries.append(query)
        return self.count_result


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            import requests
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, payload=None, status_code=200, error=None):
        self.payload = payload if payload is not None else []
        self.status_code = status_code
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.payload, self.status_code)


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def app(repository, session):
    return create_app(TestingConfig, repository=repository, seed_session=session)


@pytest.fixture
def client(app):
    return app.test_client()
