# Elasticsearch Search Module
"""
Elasticsearch 연동 모듈

주요 컴포넌트:
- config: 연결 설정 (환경 변수)
- connection: 클라이언트 생성 / 연결 확인
- es_client: 검색 facade (페이지 검색, terms 집계, 재시도 upsert/삭제, bulk)
- es_indices: 인덱스 생성/삭제/존재 확인
- query: 페이지/집계 DSL 빌더
"""

from .config import ESConfig
from .connection import check_connection, create_es_client
from .errors import ConfigurationError, MissingDocumentIdError, SearchError, SearchOperationError
from .es_client import RETRY_LIMIT, BulkItemResult, BulkResult, ESSearchClient
from .es_indices import ESIndexManager

__all__ = [
    "ESConfig",
    "create_es_client",
    "check_connection",
    "ESSearchClient",
    "ESIndexManager",
    "BulkResult",
    "BulkItemResult",
    "RETRY_LIMIT",
    "SearchError",
    "SearchOperationError",
    "MissingDocumentIdError",
    "ConfigurationError",
]
