from pydantic import BaseModel, Field
from typing import List, Any, Dict

from search_api.app.domain.models import PopularItem, RecentItem


class SearchResponse(BaseModel):
    """상품 검색 응답"""
    query: str | None = Field(None, description="요청 검색어")
    size: int = Field(..., description="페이지 크기")
    page: int = Field(..., description="1부터 시작하는 페이지 번호")
    total: int = Field(..., description="전체 검색 건수")
    totalPages: int = Field(..., description="전체 페이지 수(최소 1)")
    results: List[Dict[str, Any]] = Field(default_factory=list, description="검색 문서")


class PopularResponse(BaseModel):
    items: List[PopularItem]


class RecentResponse(BaseModel):
    items: List[RecentItem]


class SuggestResponse(BaseModel):
    suggestions: List[str]


class SearchLogRequest(BaseModel):
    keyword: str = Field(..., description="검색어")
    user_id: str | None = Field(None, description="사용자 ID (없으면 anonymous)")


class ApiResponse(BaseModel):
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="결과 메시지")
    data: Dict[str, Any] | None = Field(None, description="결과 데이터")
    trace_id: str | None = Field(None, description="요청 ID")
