"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from typing import Protocol, List, Tuple

from .models import (
    JSONDict,
    SearchResult,
    SearchLogEntry,
    PopularItem,
    RecentItem,
)


class SearchBackendPort(Protocol):
    """
    전문 검색 백엔드(OpenSearch 등).
    실패 시 BackendUnavailable 을 던진다.
    """

    def execute_search(self, index: str, body: JSONDict) -> SearchResult:
        """
        Args:
            index: 인덱스(또는 alias) 이름
            body: from/size/query/_source 가 포함된 요청 바디
        Returns:
            SearchResult: 전체 건수와 순서가 보장된 문서(_source) 목록
        """
        ...

    def execute_completion_suggest(
        self, index: str, field: str, prefix: str, size: int
    ) -> List[str]:
        """
        Returns:
            List[str]: 백엔드 랭킹 순서의 completion 옵션 텍스트
        """
        ...

    def execute_terms_aggregation(
        self, index: str, field: str, size: int
    ) -> List[Tuple[str, int]]:
        """
        Returns:
            List[Tuple[str, int]]: doc_count 내림차순 (term, count)
        """
        ...

    def execute_sorted_search(
        self, index: str, sort_field: str, direction: str, size: int
    ) -> List[JSONDict]:
        """
        Returns:
            List[JSONDict]: sort_field 기준으로 정렬된 문서(_source) 목록
        """
        ...


class StatsPort(Protocol):
    """인기/최근 검색어 통계."""

    def record_query(self, text: str | None) -> None:
        """검색어 1건 기록. 호출자에게 예외를 던지지 않는다."""
        ...

    def get_popular(self, limit: int) -> List[PopularItem]:
        ...

    def get_recent(self, limit: int) -> List[RecentItem]:
        ...


class SearchLogPort(Protocol):
    """검색 로그 영구 저장소."""

    def ensure_index(self) -> bool:
        """
        Returns:
            bool: 인덱스를 새로 만들었으면 True
        """
        ...

    def write(self, entry: SearchLogEntry) -> None:
        ...
