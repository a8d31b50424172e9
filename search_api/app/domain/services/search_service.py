# app/domain/services/search_service.py
"""
SearchService
==============

상품 검색 유스케이스.

Flow:
    검색어 기록(StatsPort) → 쿼리 구성(query_builder) → 검색 실행(SearchBackendPort) → 페이지 계산

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체는 adapters 레이어에서 주입(의존성 주입; DI)합니다.

예시:
    svc = SearchService(backend, stats, index="goods")
    page = svc.search(q="운동화", field=None, size=10, page=2)
"""

from __future__ import annotations

import logging
import time

from search_api.app.domain.models import SearchPage
from search_api.app.domain.ports import SearchBackendPort, StatsPort
from search_api.app.domain.services.query_builder import build_search, DEFAULT_SIZE
from search_api.app.domain.utils import page_offset, total_pages

logger = logging.getLogger(__name__)


class SearchService:

    def __init__(
        self,
        backend: SearchBackendPort,
        stats: StatsPort | None,
        index: str,
        default_size: int = DEFAULT_SIZE) -> None:
        self._backend = backend
        self._stats = stats
        self.index = index
        self.default_size = default_size if default_size > 0 else DEFAULT_SIZE

    # ================= public API =================
    def search(
        self,
        q: str | None,
        field: str | None = None,
        size: int | None = None,
        page: int | None = 1,
        record: bool = True) -> SearchPage:
        """
        검색을 수행하는 메서드.
        Args:
            q: str          : 검색어 (없으면 전체 검색)
            field: str      : 검색 대상 필드 (선택)
            size: int       : 페이지 크기 (없거나 0 이하이면 default_size)
            page: int       : 1부터 시작하는 페이지 번호 (1 미만이면 1)
            record: bool    : 인메모리 통계에 검색어를 기록할지 여부
        Returns:
            SearchPage: 검색 결과와 페이지 정보
        Raises:
            BackendUnavailable: 검색 백엔드 호출 실패
        """
        page_size = self.default_size if size is None or size <= 0 else size
        page_no = 1 if page is None or page < 1 else page

        if record and self._stats is not None:
            self._stats.record_query(q)

        request = build_search(q, field, page_size, page_offset(page_no, page_size))
        logger.info("service.search: q=%s field=%s kind=%s from=%s size=%s",
                    q, field, request.kind.value, request.from_, request.size)

        started = time.perf_counter()
        result = self._backend.execute_search(self.index, request.to_body())
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("service.search done: total=%s returned=%s elapsed=%.1fms",
                    result.total, len(result.results), elapsed_ms)

        return SearchPage(
            query=q,
            size=page_size,
            page=page_no,
            total=result.total,
            total_pages=total_pages(result.total, page_size),
            results=result.results,
        )
