"""
ESIndexManager 단위 테스트
"""

import pytest
from unittest.mock import Mock

from elasticsearch.exceptions import BadRequestError

from domain.product import Product
from search.es_indices import ESIndexManager


@pytest.fixture
def manager(mock_es):
    return ESIndexManager(mock_es)


class TestCreateIndex:
    """인덱스 생성 테스트"""

    def test_create_from_document_type(self, manager, mock_es):
        mock_es.indices.exists.return_value = False

        assert manager.create_document_index(Product) is True

        mock_es.indices.create.assert_called_once_with(
            index="product",
            settings={"number_of_shards": 3, "number_of_replicas": 1},
            mappings=Product.INDEX_MAPPINGS,
        )

    def test_existing_index_kept(self, manager, mock_es):
        mock_es.indices.exists.return_value = True

        assert manager.create_index("product") is True

        mock_es.indices.create.assert_not_called()
        mock_es.indices.delete.assert_not_called()

    def test_recreate(self, manager, mock_es):
        mock_es.indices.exists.return_value = True

        assert manager.create_index("product", recreate=True) is True

        mock_es.indices.delete.assert_called_once_with(index="product")
        mock_es.indices.create.assert_called_once()

    def test_bad_request(self, manager, mock_es):
        mock_es.indices.exists.return_value = False
        mock_es.indices.create.side_effect = BadRequestError(
            message="invalid mapping", meta=Mock(status=400), body={}
        )

        assert manager.create_index("product", mappings={"properties": {"x": {"type": "nope"}}}) is False


class TestDeleteIndex:
    def test_delete(self, manager, mock_es):
        mock_es.indices.exists.return_value = True

        assert manager.delete_index("product") is True
        mock_es.indices.delete.assert_called_once_with(index="product")

    def test_delete_missing(self, manager, mock_es):
        mock_es.indices.exists.return_value = False

        assert manager.delete_index("product") is True
        mock_es.indices.delete.assert_not_called()


class TestIndexExists:
    def test_exists(self, manager, mock_es):
        mock_es.indices.exists.return_value = True
        assert manager.index_exists("product") is True

    def test_refresh(self, manager, mock_es):
        manager.refresh_index("product")
        mock_es.indices.refresh.assert_called_once_with(index="product")
