"""
pytest 공통 fixture 정의
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from unittest.mock import MagicMock, Mock

from elasticsearch.exceptions import ApiError

from domain.product import Product
from search.es_client import ESSearchClient


def make_response(status: int, body: dict = None):
    """index/delete/bulk 응답 모킹 (meta.status + body)"""
    return Mock(meta=Mock(status=status), body=body if body is not None else {})


def make_api_error(status: int, body: dict = None, error_cls=ApiError):
    """ES가 4xx/5xx로 응답한 경우의 ApiError"""
    return error_cls(message=f"status {status}", meta=Mock(status=status), body=body or {})


def make_search_response(sources, total=None, aggregations=None) -> dict:
    """search 응답 모킹"""
    response = {
        "hits": {
            "total": {"value": len(sources) if total is None else total, "relation": "eq"},
            "hits": [
                {"_index": "product", "_id": str(s.get("id")), "_score": 1.0, "_source": s}
                for s in sources
            ],
        }
    }
    if aggregations is not None:
        response["aggregations"] = aggregations
    return response


@pytest.fixture
def mock_es():
    """Elasticsearch 클라이언트 모킹"""
    return MagicMock()


@pytest.fixture
def es_client(mock_es):
    """모킹된 클라이언트를 주입한 facade"""
    return ESSearchClient(mock_es)


@pytest.fixture
def sample_product():
    return Product(id=2, title="apple phone", category="phone", price=5999.0, images="https://example.com/a.png")


@pytest.fixture
def sample_products():
    """테스트용 상품 12개"""
    return [
        Product(id=i, title=f"huawei phone {i}", category="phone", price=3999.0 + i)
        for i in range(1, 13)
    ]
