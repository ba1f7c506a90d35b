"""
응답 데이터 클래스
"""

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass
class PageResponse(Generic[T]):
    """
    페이지 검색 결과

    total은 전체 매칭 문서 수이며 len(data)와 다를 수 있습니다.
    """
    page_num: int
    page_size: int
    total: int
    data: List[T] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page_num + 1 < self.total_pages
