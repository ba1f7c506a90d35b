"""
검색 DSL 빌더

facade는 쿼리를 만들지 않으므로 호출자가 이 헬퍼로 from/size, 집계를 인코딩합니다.
"""

from typing import Any, Dict, List, Optional


def match_all_query() -> Dict[str, Any]:
    return {"match_all": {}}


def term_query(field: str, value: Any) -> Dict[str, Any]:
    return {"term": {field: value}}


def page_query(
    query: Optional[Dict[str, Any]],
    page_num: int,
    page_size: int,
    sort: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    """
    페이지 검색 요청 본문 생성

    Args:
        query: 쿼리 절 (None이면 match_all)
        page_num: 페이지 번호 (0부터 시작)
        page_size: 페이지 크기
        sort: 정렬 기준 (예: [{"id": "desc"}])

    Returns:
        from/size가 인코딩된 검색 본문
    """
    if page_num < 0:
        raise ValueError(f"page_num must be >= 0, got {page_num}")
    if page_size < 0:
        raise ValueError(f"page_size must be >= 0, got {page_size}")

    body = {
        "query": query or match_all_query(),
        "from": page_num * page_size,
        "size": page_size,
        # 10,000건 초과 시에도 정확한 total
        "track_total_hits": True,
    }
    if sort:
        body["sort"] = sort
    return body


def terms_aggregation_query(
    agg_name: str,
    field: str,
    size: int = 10,
    query: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """단일 terms 집계 요청 본문 생성 (문서 hit 없음)"""
    return {
        "query": query or match_all_query(),
        "size": 0,
        "aggs": {
            agg_name: {
                "terms": {
                    "field": field,
                    "size": size,
                }
            }
        },
    }
