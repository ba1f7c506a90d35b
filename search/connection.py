"""
Elasticsearch 클라이언트 생성

프로세스당 하나의 클라이언트를 만들어 facade/repository/index manager에 주입합니다.
클라이언트 자체가 커넥션 풀을 관리하므로 여러 스레드에서 공유해도 됩니다.
"""

import logging
from typing import Optional

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ConnectionError, TransportError

from .config import ESConfig

logger = logging.getLogger(__name__)


def create_es_client(cfg: Optional[ESConfig] = None) -> Elasticsearch:
    """
    Elasticsearch 클라이언트 생성

    Args:
        cfg: 연결 설정 (None이면 환경 변수 기본값)

    Returns:
        Elasticsearch 동기 클라이언트
    """
    cfg = cfg or ESConfig()
    logger.info(f"Creating Elasticsearch client: {cfg.url}")
    return Elasticsearch(
        hosts=cfg.hosts,
        request_timeout=cfg.timeout,
        retry_on_timeout=True,
        max_retries=cfg.max_retries,
    )


def check_connection(es: Elasticsearch) -> bool:
    """ES 연결 상태 확인"""
    try:
        return bool(es.ping())
    except (ConnectionError, TransportError):
        logger.warning("Elasticsearch connection failed")
        return False
