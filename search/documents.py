"""
문서 변환 헬퍼

- ID 추출: 쓰기 경로의 모든 문서는 es_id 속성(또는 "id" 키)을 가져야 함
- 직렬화: pydantic 모델 / dataclass / dict → ES _source
- 역직렬화: _source → 결과 타입
"""

import dataclasses
from typing import Any, Dict, Mapping, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel

from .errors import MissingDocumentIdError

T = TypeVar("T")

ID_FIELD = "id"


@runtime_checkable
class Identifiable(Protocol):
    """ES 문서 ID를 직접 제공하는 문서"""

    @property
    def es_id(self) -> Any: ...


def get_es_id(doc: Any) -> str:
    """
    문서의 ES _id 반환

    Args:
        doc: es_id 속성을 가진 객체, 또는 "id" 키를 가진 dict

    Returns:
        _id 문자열

    Raises:
        MissingDocumentIdError: ID가 없거나 None인 경우
    """
    if isinstance(doc, Identifiable):
        value = doc.es_id
    elif isinstance(doc, Mapping):
        value = doc.get(ID_FIELD)
    else:
        raise MissingDocumentIdError(doc)

    if value is None or value == "":
        raise MissingDocumentIdError(doc)
    return str(value)


def to_source(doc: Any) -> Dict[str, Any]:
    """문서를 ES _source dict로 변환"""
    if isinstance(doc, BaseModel):
        return doc.model_dump(mode="json")
    if dataclasses.is_dataclass(doc) and not isinstance(doc, type):
        return dataclasses.asdict(doc)
    if isinstance(doc, Mapping):
        return dict(doc)
    raise TypeError(f"Cannot serialize document of type {type(doc).__name__}")


def from_source(source: Dict[str, Any], result_type: Type[T]) -> T:
    """ES _source를 result_type으로 변환"""
    if result_type is dict:
        return source
    if issubclass(result_type, BaseModel):
        return result_type.model_validate(source)
    return result_type(**source)
