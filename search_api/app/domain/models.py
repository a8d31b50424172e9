"""
도메인 모델 정의.

- QueryEvent: 기록된 검색어 1건(최근 검색어 링 버퍼에 저장)
- SearchLogEntry: search_log 인덱스에 영구 저장되는 검색 로그
- FieldRole / QueryKind: 검색 필드 역할과 생성된 쿼리 유형
- StructuredQuery: 검색어 + 필드 선택으로부터 만든 OpenSearch 검색 요청
- SearchResult / SearchPage: 검색 결과와 페이지 정보
- PopularItem / RecentItem: 인기/최근 검색어 응답 항목

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


JSONDict = dict[str, Any]


def now_millis() -> int:
    return int(time.time() * 1000)


class QueryEvent(BaseModel):
    """기록된 검색어 1건. 생성 후 변경 불가."""
    model_config = ConfigDict(frozen=True)

    keyword: str = Field(..., min_length=1, description="trim 된 검색어")
    timestamp: int = Field(default_factory=now_millis, description="epoch millis")

    @field_validator("keyword", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class SearchLogEntry(BaseModel):
    """
    search_log 인덱스 문서 1건과 1:1로 매핑되는 모델.
    OpenSearch 매핑:
      - keyword: text (+ keyword 서브필드)
      - userId: keyword
      - timestamp: date (strict_date_optional_time||epoch_millis)
    """
    model_config = ConfigDict(populate_by_name=True)

    keyword: str = Field(..., min_length=1, description="검색어")
    user_id: str = Field("anonymous", alias="userId", description="사용자 ID")
    timestamp: int = Field(default_factory=now_millis, description="epoch millis")

    @field_validator("keyword", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    def to_event(self) -> QueryEvent:
        return QueryEvent(keyword=self.keyword, timestamp=self.timestamp)


class FieldRole(str, Enum):
    """검색 대상으로 선택할 수 있는 물리 필드."""
    chosung = "goods_name_chosung"
    name = "goods_name"
    keyword = "key_word"
    code = "goods_code"


class QueryKind(str, Enum):
    """생성된 검색 쿼리 유형."""
    match_all = "match_all"
    phrase_prefix = "match_phrase_prefix"
    field_match = "match"
    multi_match = "multi_match"
    bool_prefix = "bool"


class StructuredQuery(BaseModel):
    """검색어/필드/페이지 정보로 만든 검색 요청."""
    kind: QueryKind
    query: JSONDict = Field(..., description="OpenSearch query DSL")
    from_: int = Field(0, ge=0)
    size: int = Field(10, gt=0)
    source_includes: list[str] | None = Field(None, description="_source 필터")

    def to_body(self) -> JSONDict:
        body: JSONDict = {"from": self.from_, "size": self.size, "query": self.query}
        if self.source_includes:
            body["_source"] = {"includes": list(self.source_includes)}
        return body


class SearchResult(BaseModel):
    """검색 백엔드 실행 결과."""
    total: int = Field(0, ge=0)
    results: list[JSONDict] = Field(default_factory=list)


class SearchPage(BaseModel):
    """페이지 정보를 포함한 검색 응답."""
    query: str | None = None
    size: int
    page: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=1)
    results: list[JSONDict] = Field(default_factory=list)


class PopularItem(BaseModel):
    keyword: str
    count: int = 0


class RecentItem(BaseModel):
    keyword: str
    ts: int = 0
