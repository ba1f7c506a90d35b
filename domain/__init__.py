"""도메인 모델 (Product 엔티티, 응답 타입)"""

from .product import Product
from .response import PageResponse

__all__ = [
    "Product",
    "PageResponse",
]
