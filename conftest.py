"""Shared fixtures: an in-memory transport and a sample model."""

import pytest

from es_query_builder import Model


class FakeTransport:
    """Records requests and replies with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response or {
            "_shards": {"total": 1, "successful": 1},
            "hits": {"total": 0, "hits": []},
        }
        self.error = error
        self.calls = []

    def search(self, request, index):
        self.calls.append((request, index))
        if self.error is not None:
            raise self.error
        return self.response


class Product(Model):
    index = "products"
    connection = "testing"


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def product():
    return Product()


@pytest.fixture
def builder(product, transport):
    return product.query(transport=transport)


@pytest.fixture
def raw_response():
    return {
        "took": 3,
        "_shards": {"total": 1, "successful": 1, "failed": 0},
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "hits": [
                {"_id": "1", "_source": {"title": "Desk lamp", "brand": {"name": "Acme"}}},
                {"_id": "2", "_source": {"title": "Floor lamp", "brand": {"name": "Lumo"}}},
            ],
        },
        "aggregations": {
            "color": {"buckets": [{"key": "red", "doc_count": 5}, {"key": "blue", "doc_count": 2}]},
            "size": {"buckets": [{"key": "XL", "doc_count": 1}]},
        },
    }
