"""Product document repository."""

from typing import Any, Dict, List

from domain.product import Product
from search.query import term_query

from .base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Product 문서 CRUD 리포지토리"""

    def default_index_name(self) -> str:
        return Product.INDEX_NAME

    @property
    def document_type(self) -> type:
        return Product

    def _from_es_dict(self, source: Dict[str, Any]) -> Product:
        return Product.model_validate(source)

    def find_by_category(self, category: str, size: int = 1000) -> List[Product]:
        """분류(keyword) 정확 일치 조회"""
        return self.search(term_query("category", category), size=size)
