"""
SearchLogService
================

검색 로그 파이프라인의 생산자/소비자 쪽 유스케이스.

Flow:
    publish(keyword, user_id) → consume(entry) → StatsPort.record_query + SearchLogPort.write

검색 API와 직접 제출 API(POST /api/search-log)가 모두 같은 StatsPort 인스턴스로 모인다.
실패는 로그만 남기고 호출자에게 전파하지 않는다.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from search_api.app.domain.models import SearchLogEntry
from search_api.app.domain.ports import SearchLogPort, StatsPort

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


class SearchLogService:

    def __init__(self, stats: StatsPort, writer: SearchLogPort | None) -> None:
        self._stats = stats
        self._writer = writer

    def publish(
        self,
        keyword: str | None,
        user_id: str | None = None,
        record: bool = True) -> SearchLogEntry | None:
        """
        검색어로 로그 항목을 만들어 소비 단계로 넘긴다.
        Args:
            keyword: str        : 검색어 (비어 있으면 무시)
            user_id: str | None : 사용자 ID (없으면 anonymous)
            record: bool        : 인메모리 통계 반영 여부
        Returns:
            SearchLogEntry | None: 처리한 항목, 무시했으면 None
        """
        if keyword is None or not keyword.strip():
            return None
        try:
            entry = SearchLogEntry(keyword=keyword, user_id=user_id or ANONYMOUS)
        except ValidationError as e:
            logger.warning("invalid search log: keyword=%r error=%s", keyword, e)
            return None
        self.consume(entry, record=record)
        return entry

    def consume(self, entry: SearchLogEntry, record: bool = True) -> None:
        """
        로그 항목 1건을 인메모리 통계에 반영하고 영구 저장소에 적재한다.
        Args:
            entry: SearchLogEntry   : 검색 로그
            record: bool            : 인메모리 통계 반영 여부 (이미 기록한 경우 False)
        """
        if record:
            self._stats.record_query(entry.keyword)
        if self._writer is None:
            return
        try:
            self._writer.write(entry)
            logger.info("search log stored: keyword=%s user_id=%s timestamp=%s",
                        entry.keyword, entry.user_id, entry.timestamp)
        except Exception as e:
            logger.error("failed to store search log: keyword=%s error=%s", entry.keyword, e)
