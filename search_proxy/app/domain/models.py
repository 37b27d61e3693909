"""
도메인 모델 정의.

- LeafNode/GroupNode/UnknownNode: 업스트림 RelatedTopics 트리를 한 번만 분류한 태그드 유니온
- NormalizedResult: 평탄화 결과 1건({url, title})
- PageMetadata/SearchPage: 페이지 슬라이스와 페이지 메타데이터
- SearchLogEntry: 검색 이력(NDJSON) 1줄

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
결과/페이지 모델은 frozen(불변)이며 요청마다 새로 생성됩니다.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


JSONDict = dict[str, Any]

class TopicKind(str, Enum):
    leaf = "leaf"
    group = "group"
    unknown = "unknown"

class SearchMethod(str, Enum):
    GET = "GET"
    POST = "POST"


# ---- 업스트림 토픽 트리 ----
class LeafNode(BaseModel):
    """FirstURL/Text 키를 모두 가진 결과 노드(값은 비어 있을 수 있음)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TopicKind.leaf] = TopicKind.leaf
    url: str | None = Field(None, description="FirstURL 원본 값")
    text: str | None = Field(None, description="Text 원본 값")


class GroupNode(BaseModel):
    """Name/Topics 를 가진 그룹 노드. children 은 재귀적으로 분류된 노드."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TopicKind.group] = TopicKind.group
    name: str | None = Field(None, description="그룹 이름")
    children: list["TopicNode"] = Field(default_factory=list)


class UnknownNode(BaseModel):
    """어느 형태에도 맞지 않는 노드(빈 그룹, 반쪽짜리 leaf, 객체가 아닌 값)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TopicKind.unknown] = TopicKind.unknown


TopicNode = Annotated[Union[LeafNode, GroupNode, UnknownNode], Field(discriminator="kind")]
GroupNode.model_rebuild()


# ---- 평탄화/페이지 결과 ----
class NormalizedResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="결과 URL")
    title: str = Field(..., min_length=1, description="결과 제목(업스트림 Text)")


class PageMetadata(BaseModel):
    """
    페이지 메타데이터. JSON 직렬화 시 camelCase 키를 사용한다.
    (totalItems, totalPages, currentPage, pageSize, hasNextPage, hasPreviousPage)
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=1)
    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=0)
    has_next_page: bool
    has_previous_page: bool


class SearchPage(BaseModel):
    """검색 응답 바디: {data, pagination}"""
    model_config = ConfigDict(frozen=True)

    data: list[NormalizedResult] = Field(default_factory=list)
    pagination: PageMetadata

    def to_response(self) -> JSONDict:
        return self.model_dump(by_alias=True)


# ---- 검색 이력 ----
class SearchLogEntry(BaseModel):
    """
    검색 이력 한 줄. 직렬화 키는 camelCase(searchQuery, pageNumber, limitNumber).
    pageNumber/limitNumber 는 클라이언트가 보낸 경우에만 기록한다.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        description="ISO-8601 UTC 시각",
    )
    method: SearchMethod
    search_query: str
    page_number: int | None = None
    limit_number: int | None = None

    def to_json_line(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_response(self) -> JSONDict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
