"""
Elasticsearch 검색/쓰기 facade

주입받은 클라이언트로 페이지 검색, terms 집계, 단건 upsert/삭제(재시도 포함),
bulk upsert/삭제를 수행하고 응답을 PageResponse / 집계 dict로 변환합니다.

재시도 정책:
- 응답을 받았으나 성공 상태가 아닌 경우(ApiError 포함)만 재시도, 최대 RETRY_LIMIT회
- 전송 계층 오류(연결 실패, 타임아웃 등)는 즉시 SearchOperationError
- 재시도 사이 대기 없음
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ApiError, TransportError

from domain.response import PageResponse

from .documents import from_source, get_es_id, to_source
from .errors import MissingDocumentIdError, SearchOperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_LIMIT = 3

HTTP_OK = 200
HTTP_CREATED = 201

# 검색 응답 처리 중 발생 가능한 오류 (pydantic ValidationError는 ValueError)
_SEARCH_FAILURES = (ApiError, TransportError, KeyError, TypeError, ValueError)


@dataclass
class BulkItemResult:
    """bulk 요청의 개별 항목 결과"""
    id: str
    action: str
    status: int
    result: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class BulkResult:
    """
    bulk 요청 결과

    ok는 최상위 HTTP 상태만 반영합니다. 개별 항목 실패는 has_failures / items로 확인.
    """
    ok: bool
    status: int
    has_failures: bool = False
    items: List[BulkItemResult] = field(default_factory=list)

    @property
    def failed_items(self) -> List[BulkItemResult]:
        return [item for item in self.items if not item.ok]


def _total_hits(hits: Dict[str, Any]) -> int:
    """hits.total 파싱 (ES 7+: {"value": n}, 이전 버전: n)"""
    total = hits.get("total", 0)
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total)


def _dsl(query: Dict[str, Any]) -> str:
    return json.dumps(query, ensure_ascii=False, default=str)


class ESSearchClient:
    """
    Elasticsearch 검색 facade

    세션 상태가 없으므로 여러 스레드에서 동시에 호출해도 됩니다.

    사용 예:
        es = create_es_client()
        client = ESSearchClient(es)
        page = client.search("product", page_query(term_query("category", "phone"), 0, 5), Product, 0, 5)
    """

    def __init__(self, es: Elasticsearch, retry_limit: int = RETRY_LIMIT):
        """
        Args:
            es: 공유 Elasticsearch 클라이언트
            retry_limit: 단건 upsert/삭제 최대 시도 횟수
        """
        if retry_limit < 1:
            raise ValueError(f"retry_limit must be >= 1, got {retry_limit}")
        self.es = es
        self.retry_limit = retry_limit

    def is_available(self) -> bool:
        """ES 연결 상태 확인"""
        try:
            return bool(self.es.ping())
        except TransportError:
            logger.warning("Elasticsearch connection failed")
            return False

    def search(
        self,
        index: str,
        query: Dict[str, Any],
        result_type: Type[T],
        page_num: int,
        page_size: int,
    ) -> PageResponse[T]:
        """
        페이지 검색

        from/size는 query에 이미 인코딩되어 있어야 합니다 (search.query.page_query 참고).
        page_num/page_size는 검증 없이 결과에 그대로 담깁니다.

        Args:
            index: 인덱스명
            query: 검색 DSL
            result_type: _source를 변환할 타입 (pydantic 모델, dataclass, dict)
            page_num: 페이지 번호
            page_size: 페이지 크기

        Returns:
            PageResponse

        Raises:
            SearchOperationError: 요청 또는 변환 실패
        """
        logger.info(f"ES search DSL: index={index}, body={_dsl(query)}")
        try:
            response = self.es.search(index=index, body=query)
            hits = response["hits"]
            data = [from_source(hit["_source"], result_type) for hit in hits["hits"]]
            total = _total_hits(hits)
        except _SEARCH_FAILURES as e:
            logger.error(f"ES search error: index={index}, error={e}")
            raise SearchOperationError(str(e), operation="search", index=index) from e

        logger.info(f"ES search: index={index}, total={total}, hits={len(data)}")
        return PageResponse(page_num=page_num, page_size=page_size, total=total, data=data)

    def agg_search(self, index: str, query: Dict[str, Any], agg_name: str) -> Dict[int, int]:
        """
        terms 집계

        Args:
            index: 인덱스명
            query: terms 집계 하나를 포함한 검색 DSL
            agg_name: 집계 이름

        Returns:
            {bucket key(int): doc_count}

        Raises:
            SearchOperationError: 요청 실패, 집계 없음, terms 집계가 아님
        """
        logger.info(f"ES aggregation DSL: index={index}, body={_dsl(query)}")
        try:
            response = self.es.search(index=index, body=query)
            aggregation = response["aggregations"][agg_name]
            if "buckets" not in aggregation:
                raise ValueError(f"Aggregation '{agg_name}' is not a terms aggregation")
            return {int(bucket["key"]): bucket["doc_count"] for bucket in aggregation["buckets"]}
        except _SEARCH_FAILURES as e:
            logger.error(f"ES aggregation error: index={index}, agg={agg_name}, error={e!r}")
            raise SearchOperationError(
                str(e), operation="aggregation", index=index, details={"agg_name": agg_name}
            ) from e

    def upsert_document(self, doc: Any, index: str) -> bool:
        """
        단건 추가 또는 교체

        같은 ID로 다시 호출하면 덮어씁니다 (UpdateRequest 대신 index API 사용,
        문서가 없어도 document_missing_exception 없음).

        Returns:
            200/201이면 True, 재시도 소진 시 False

        Raises:
            MissingDocumentIdError: 문서에 ID가 없음
            SearchOperationError: 직렬화 실패 또는 전송 계층 오류 (재시도 없음)
        """
        doc_id = get_es_id(doc)
        source = self._serialize(doc, "index", index, doc_id)
        return self._send_with_retry(
            operation="index",
            index=index,
            doc_id=doc_id,
            send=lambda: self.es.index(index=index, id=doc_id, document=source),
            ok_statuses=(HTTP_OK, HTTP_CREATED),
            payload=source,
        )

    def delete_document(self, doc_id: int, index: str) -> bool:
        """
        단건 삭제

        Returns:
            200이면 True, 재시도 소진 시 False (없는 문서의 404 포함)

        Raises:
            SearchOperationError: 전송 계층 오류 (재시도 없음)
        """
        if doc_id is None:
            raise MissingDocumentIdError(doc_id)
        es_id = str(doc_id)
        return self._send_with_retry(
            operation="delete",
            index=index,
            doc_id=es_id,
            send=lambda: self.es.delete(index=index, id=es_id),
            ok_statuses=(HTTP_OK,),
        )

    @staticmethod
    def _serialize(doc: Any, operation: str, index: str, doc_id: str) -> Dict[str, Any]:
        try:
            return to_source(doc)
        except (TypeError, ValueError) as e:
            logger.error(
                f"ES {operation} serialization error: index={index}, id={doc_id}, "
                f"type={type(doc).__name__}, error={e}"
            )
            raise SearchOperationError(
                str(e), operation=operation, index=index, doc_id=doc_id
            ) from e

    def _send_with_retry(
        self,
        operation: str,
        index: str,
        doc_id: str,
        send: Callable[[], Any],
        ok_statuses: Sequence[int],
        payload: Optional[Dict[str, Any]] = None,
    ) -> bool:
        for attempt in range(1, self.retry_limit + 1):
            try:
                response = send()
                status, body = response.meta.status, response.body
            except ApiError as e:
                # 응답은 받았으나 4xx/5xx
                status, body = e.meta.status, e.body
            except TransportError as e:
                logger.error(
                    f"ES {operation} transport error: index={index}, id={doc_id}, "
                    f"payload={payload}, error={e}"
                )
                raise SearchOperationError(
                    str(e), operation=operation, index=index, doc_id=doc_id
                ) from e

            if status in ok_statuses:
                return True

            logger.info(
                f"ES {operation} not successful ({attempt}/{self.retry_limit}): index={index}, "
                f"id={doc_id}, status={status}, payload={payload}, response={body}"
            )

        logger.warning(f"ES {operation} failed after {self.retry_limit} attempts: index={index}, id={doc_id}")
        return False

    def bulk_upsert(self, docs: Iterable[Any], index: str) -> bool:
        """
        bulk 추가/교체

        최상위 상태가 200이면 True. 개별 항목 실패는 반영되지 않음 (bulk_upsert_detailed 참고).
        """
        return self.bulk_upsert_detailed(docs, index).ok

    def bulk_delete(self, doc_ids: Iterable[int], index: str) -> bool:
        """bulk 삭제 (최상위 상태가 200이면 True)"""
        return self.bulk_delete_detailed(doc_ids, index).ok

    def bulk_upsert_detailed(self, docs: Iterable[Any], index: str) -> BulkResult:
        """bulk 추가/교체 (항목별 결과 포함)"""
        operations: List[Dict[str, Any]] = []
        for doc in docs:
            doc_id = get_es_id(doc)
            operations.append({"index": {"_index": index, "_id": doc_id}})
            operations.append(self._serialize(doc, "bulk_index", index, doc_id))
        return self._send_bulk("bulk_index", index, operations)

    def bulk_delete_detailed(self, doc_ids: Iterable[int], index: str) -> BulkResult:
        """bulk 삭제 (항목별 결과 포함)"""
        operations: List[Dict[str, Any]] = []
        for doc_id in doc_ids:
            if doc_id is None:
                raise MissingDocumentIdError(doc_id)
            operations.append({"delete": {"_index": index, "_id": str(doc_id)}})
        return self._send_bulk("bulk_delete", index, operations)

    def _send_bulk(self, operation: str, index: str, operations: List[Dict[str, Any]]) -> BulkResult:
        if not operations:
            return BulkResult(ok=True, status=HTTP_OK)

        try:
            response = self.es.bulk(operations=operations)
            status, body = response.meta.status, response.body
        except ApiError as e:
            logger.warning(f"ES {operation} rejected: index={index}, status={e.meta.status}, response={e.body}")
            return BulkResult(ok=False, status=e.meta.status)
        except TransportError as e:
            logger.error(f"ES {operation} transport error: index={index}, error={e}")
            raise SearchOperationError(str(e), operation=operation, index=index) from e

        result = BulkResult(
            ok=status == HTTP_OK,
            status=status,
            has_failures=bool(body.get("errors", False)),
            items=self._parse_bulk_items(body.get("items", [])),
        )
        if result.has_failures:
            logger.warning(
                f"ES {operation} partial failure: index={index}, "
                f"failed={len(result.failed_items)}/{len(result.items)}"
            )
        return result

    @staticmethod
    def _parse_bulk_items(items: List[Dict[str, Any]]) -> List[BulkItemResult]:
        parsed = []
        for item in items:
            # 각 항목은 {"index": {...}} 또는 {"delete": {...}} 형태
            for action, detail in item.items():
                parsed.append(BulkItemResult(
                    id=str(detail.get("_id")),
                    action=action,
                    status=int(detail.get("status", 0)),
                    result=detail.get("result"),
                    error=detail.get("error"),
                ))
        return parsed

    def close(self):
        """클라이언트 연결 종료"""
        self.es.close()
