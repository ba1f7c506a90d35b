"""
Elasticsearch 인덱스 관리

인덱스 생성, 삭제, 존재 확인, refresh를 담당합니다.
설정/매핑은 문서 타입에 선언된 INDEX_NAME / INDEX_SETTINGS / INDEX_MAPPINGS를 사용합니다.
"""

import logging
from typing import Any, Dict, Optional

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class ESIndexManager:
    """
    Elasticsearch 인덱스 관리자

    사용 예:
        manager = ESIndexManager(create_es_client())
        manager.create_document_index(Product)
        manager.index_exists("product")
    """

    def __init__(self, es: Elasticsearch):
        self.es = es

    def index_exists(self, index_name: str) -> bool:
        """인덱스 존재 여부"""
        return bool(self.es.indices.exists(index=index_name))

    def create_index(
        self,
        index_name: str,
        settings: Optional[Dict[str, Any]] = None,
        mappings: Optional[Dict[str, Any]] = None,
        recreate: bool = False,
    ) -> bool:
        """
        단일 인덱스 생성

        Args:
            index_name: 인덱스명
            settings: 인덱스 설정 (shards, replicas 등)
            mappings: 필드 매핑
            recreate: 기존 인덱스 삭제 후 재생성

        Returns:
            성공 여부 (이미 존재하면 True)
        """
        try:
            if self.index_exists(index_name):
                if recreate:
                    logger.info(f"Deleting existing index: {index_name}")
                    self.es.indices.delete(index=index_name)
                else:
                    logger.info(f"Index already exists: {index_name}")
                    return True

            self.es.indices.create(
                index=index_name,
                settings=settings or {},
                mappings=mappings or {},
            )
            logger.info(f"Index created: {index_name}")
            return True

        except BadRequestError as e:
            logger.error(f"Failed to create index {index_name}: {e}")
            return False

    def create_document_index(self, document_type: Any, recreate: bool = False) -> bool:
        """문서 타입에 선언된 메타데이터로 인덱스 생성"""
        return self.create_index(
            document_type.INDEX_NAME,
            settings=getattr(document_type, "INDEX_SETTINGS", None),
            mappings=getattr(document_type, "INDEX_MAPPINGS", None),
            recreate=recreate,
        )

    def delete_index(self, index_name: str) -> bool:
        """
        인덱스 삭제

        Returns:
            성공 여부 (존재하지 않으면 True)
        """
        if not self.index_exists(index_name):
            logger.info(f"Index does not exist: {index_name}")
            return True

        self.es.indices.delete(index=index_name)
        logger.info(f"Index deleted: {index_name}")
        return True

    def refresh_index(self, index_name: str) -> None:
        """인덱스 refresh (직전 쓰기를 검색에 반영)"""
        self.es.indices.refresh(index=index_name)
        logger.info(f"Index refreshed: {index_name}")


# CLI 인터페이스
def main():
    """CLI 진입점"""
    import argparse

    from domain.product import Product

    from .config import ESConfig
    from .connection import create_es_client

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="ES Index Manager")
    parser.add_argument("action", choices=["create", "delete", "exists", "refresh"])
    parser.add_argument("--index", "-i", help="Target index (default: product index)")
    parser.add_argument("--recreate", "-r", action="store_true", help="Recreate existing index")

    args = parser.parse_args()

    cfg = ESConfig()
    index_name = args.index or cfg.product_index
    es = create_es_client(cfg)
    manager = ESIndexManager(es)

    try:
        if args.action == "create":
            result = manager.create_index(
                index_name,
                settings=Product.INDEX_SETTINGS,
                mappings=Product.INDEX_MAPPINGS,
                recreate=args.recreate,
            )
            print(f"Create {index_name}: {'OK' if result else 'FAILED'}")

        elif args.action == "delete":
            result = manager.delete_index(index_name)
            print(f"Delete {index_name}: {'OK' if result else 'FAILED'}")

        elif args.action == "exists":
            print(f"Exists {index_name}: {manager.index_exists(index_name)}")

        elif args.action == "refresh":
            manager.refresh_index(index_name)
            print(f"Refresh {index_name}: OK")

    finally:
        es.close()


if __name__ == "__main__":
    main()
