"""
Product 엔티티

인덱스 이름/설정/매핑을 모델에 함께 선언합니다.
ESIndexManager.create_document_index()가 이 값을 읽어 인덱스를 만듭니다.
"""

from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """상품 문서"""

    INDEX_NAME: ClassVar[str] = "product"
    INDEX_SETTINGS: ClassVar[Dict[str, Any]] = {
        "number_of_shards": 3,
        "number_of_replicas": 1,
    }
    INDEX_MAPPINGS: ClassVar[Dict[str, Any]] = {
        "properties": {
            "id": {"type": "long"},
            "title": {"type": "text"},
            "category": {"type": "keyword"},
            "price": {"type": "double"},
            # 이미지 URL은 검색 대상 아님
            "images": {"type": "keyword", "index": False},
        }
    }

    id: int = Field(..., description="상품 ID (ES _id)")
    title: str = Field(default="", description="상품명")
    category: str = Field(default="", description="분류")
    price: float = Field(default=0.0, ge=0, description="가격")
    images: Optional[str] = Field(default=None, description="이미지 URL")

    @property
    def es_id(self) -> int:
        return self.id
