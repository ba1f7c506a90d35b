"""
단일 인덱스 문서 CRUD 리포지토리

save / find_by_id / find_all / delete / save_all / find_page / search
페이지 검색은 ESSearchClient.search를 그대로 사용합니다.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import NotFoundError

from domain.response import PageResponse
from search.documents import get_es_id, to_source
from search.es_client import ESSearchClient
from search.query import page_query

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Elasticsearch 문서 CRUD 기본 리포지토리"""

    # find_all 정렬 기준 (매핑에 정렬 가능한 필드여야 함)
    id_field = "id"

    def __init__(self, es: Elasticsearch, index_name: Optional[str] = None):
        self.es = es
        self.searcher = ESSearchClient(es)
        self._index_name = index_name

    @property
    def index_name(self) -> str:
        return self._index_name or self.default_index_name()

    @abstractmethod
    def default_index_name(self) -> str:
        """기본 인덱스명"""
        ...

    @abstractmethod
    def _from_es_dict(self, source: Dict[str, Any]) -> T:
        """ES _source를 도메인 객체로 변환"""
        ...

    @property
    @abstractmethod
    def document_type(self) -> type:
        """검색 결과 변환 타입"""
        ...

    @staticmethod
    def _refresh(refresh: bool):
        return "wait_for" if refresh else False

    def save(self, doc: T, refresh: bool = False) -> T:
        """단일 문서 저장 (같은 ID면 교체)"""
        self.es.index(
            index=self.index_name,
            id=get_es_id(doc),
            document=to_source(doc),
            refresh=self._refresh(refresh),
        )
        return doc

    def save_all(self, docs: Iterable[T], refresh: bool = False) -> int:
        """
        여러 문서 저장 (ESSearchClient bulk 사용)

        Returns:
            항목별 결과 중 성공 건수
        """
        result = self.searcher.bulk_upsert_detailed(docs, self.index_name)
        saved = sum(1 for item in result.items if item.ok)
        if refresh and result.items:
            self.es.indices.refresh(index=self.index_name)
        logger.info(f"Saved {saved}/{len(result.items)} documents to {self.index_name}")
        return saved

    def find_by_id(self, doc_id: Any) -> Optional[T]:
        """ID로 단일 문서 조회 (없으면 None)"""
        try:
            resp = self.es.get(index=self.index_name, id=str(doc_id))
        except NotFoundError:
            return None
        return self._from_es_dict(resp["_source"])

    def exists_by_id(self, doc_id: Any) -> bool:
        return bool(self.es.exists(index=self.index_name, id=str(doc_id)))

    def find_all(self, batch_size: int = 1000) -> Iterator[T]:
        """
        인덱스 내 모든 문서를 ID 순으로 반환

        find_page를 페이지 단위로 반복하므로 index.max_result_window(기본 10,000)까지만 조회됩니다.
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        page_num = 0
        while True:
            page = self.find_page(page_num, batch_size, sort=[{self.id_field: "asc"}])
            yield from page.data
            if len(page.data) < batch_size:
                return
            page_num += 1

    def find_page(
        self,
        page_num: int,
        page_size: int,
        sort: Optional[List[Any]] = None,
    ) -> PageResponse[T]:
        """전체 문서 페이지 조회 (page_num은 0부터)"""
        return self.search_page(None, page_num, page_size, sort=sort)

    def search(self, query: Dict[str, Any], size: int = 1000) -> List[T]:
        """쿼리 절로 검색 (최대 size건)"""
        resp = self.es.search(index=self.index_name, query=query, size=size)
        return [self._from_es_dict(h["_source"]) for h in resp["hits"]["hits"]]

    def search_page(
        self,
        query: Optional[Dict[str, Any]],
        page_num: int,
        page_size: int,
        sort: Optional[List[Any]] = None,
    ) -> PageResponse[T]:
        """쿼리 절로 페이지 검색"""
        body = page_query(query, page_num, page_size, sort=sort)
        return self.searcher.search(self.index_name, body, self.document_type, page_num, page_size)

    def delete(self, doc: T, refresh: bool = False) -> bool:
        """문서 삭제"""
        return self.delete_by_id(get_es_id(doc), refresh=refresh)

    def delete_by_id(self, doc_id: Any, refresh: bool = False) -> bool:
        """
        ID로 문서 삭제

        Returns:
            삭제 여부 (없는 문서면 False)
        """
        try:
            self.es.delete(index=self.index_name, id=str(doc_id), refresh=self._refresh(refresh))
        except NotFoundError:
            logger.info(f"Document not found for delete: index={self.index_name}, id={doc_id}")
            return False
        return True

    def count(self) -> int:
        """인덱스 내 총 문서 수"""
        resp = self.es.count(index=self.index_name)
        return int(resp["count"])
