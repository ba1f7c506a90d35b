"""
Elasticsearch 연결 설정

환경 변수(.env 포함)에서 연결 정보를 읽습니다.
인증/TLS는 지원하지 않습니다 (로컬/내부망 단일 노드 기준).
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class ESConfig:
    """
    Elasticsearch 연결 설정

    Attributes:
        host: ES 호스트명
        port: ES 포트
        scheme: http / https
        timeout: 요청 타임아웃 (초)
        max_retries: 클라이언트 전송 계층 재시도 횟수 (facade 재시도와 별개)
        product_index: Product 문서 인덱스명
    """

    host: str = field(default_factory=lambda: os.getenv("ES_HOST", "localhost"))
    port: int = field(default_factory=lambda: _env_int("ES_PORT", "9200"))
    scheme: str = field(default_factory=lambda: os.getenv("ES_SCHEME", "http"))
    timeout: int = field(default_factory=lambda: _env_int("ES_TIMEOUT", "30"))
    max_retries: int = field(default_factory=lambda: _env_int("ES_MAX_RETRIES", "3"))
    product_index: str = field(default_factory=lambda: os.getenv("ES_PRODUCT_INDEX", "product"))

    def __post_init__(self):
        if not self.host:
            raise ConfigurationError("ES_HOST is empty")
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"ES_PORT out of range: {self.port}")
        if self.scheme not in ("http", "https"):
            raise ConfigurationError(f"Unsupported ES_SCHEME: {self.scheme}")

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def hosts(self) -> List[str]:
        """Elasticsearch 클라이언트용 호스트 목록"""
        return [self.url]
