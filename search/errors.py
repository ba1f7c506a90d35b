"""
검색 계층 커스텀 예외 클래스
- 호출자에게는 모두 SearchError(RuntimeError)로 보임
- 원인 예외는 항상 __cause__로 연결
"""

from typing import Any, Optional


class SearchError(RuntimeError):
    """검색 계층 기본 예외"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class SearchOperationError(SearchError):
    """ES 요청 실패 (전송 오류, 응답 파싱 오류 등)"""

    def __init__(
        self,
        message: str,
        operation: str,
        index: Optional[str] = None,
        doc_id: Optional[Any] = None,
        details: dict = None,
    ):
        super().__init__(message, details=details)
        self.operation = operation
        self.index = index
        self.doc_id = doc_id

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "operation": self.operation,
            "index": self.index,
            "doc_id": self.doc_id,
        })
        return data


class MissingDocumentIdError(SearchError, ValueError):
    """문서에서 ID를 얻을 수 없음"""

    def __init__(self, document: Any):
        super().__init__(
            message=f"Document has no identifier: {type(document).__name__}",
            details={"error_code": "MISSING_DOCUMENT_ID"},
        )


class ConfigurationError(SearchError):
    """잘못된 연결 설정"""
