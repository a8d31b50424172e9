# app/domain/services/stats_service.py
"""
인기 검색어 / 최근 검색어 서비스
================================

하이브리드 방식: 인메모리(실시간) + OpenSearch(영구 저장 및 통계)

- LiveStatsService: 링 버퍼 + 횟수 테이블 (프로세스 수명 동안 유지)
- DurableStatsService: search_log 인덱스 집계/정렬 조회
- FallbackStatsService: durable 조회 실패 시 live 로 조용히 대체하는 데코레이터

어떤 구성을 쓸지는 create_stats_service() 에서 설정값으로 한 번만 결정한다.

예시:
    stats = create_stats_service(settings, backend)
    stats.record_query("운동화")
    stats.get_popular(10)   # [PopularItem(keyword="운동화", count=1)]
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from search_api.app.domain.models import QueryEvent, PopularItem, RecentItem
from search_api.app.domain.ports import SearchBackendPort, StatsPort
from search_api.app.domain.stats.recency import RecencyRing, FrequencyTable

logger = logging.getLogger(__name__)

DEFAULT_POPULAR_LIMIT = 10
DEFAULT_RECENT_MAX = 100


def normalize_popular_limit(limit: int | None, default: int = DEFAULT_POPULAR_LIMIT) -> int:
    return default if limit is None or limit <= 0 else limit


def normalize_recent_limit(limit: int | None, capacity: int) -> int:
    return capacity if limit is None or limit <= 0 else min(limit, capacity)


class LiveStatsService(StatsPort):

    def __init__(
        self,
        capacity: int = DEFAULT_RECENT_MAX,
        default_popular_limit: int = DEFAULT_POPULAR_LIMIT) -> None:
        self.ring = RecencyRing(capacity)
        self.table = FrequencyTable()
        self.default_popular_limit = default_popular_limit

    @property
    def capacity(self) -> int:
        return self.ring.capacity

    # ================= public API =================
    def record_query(self, text: str | None) -> None:
        """
        검색어를 기록한다. 빈 검색어는 무시한다.
        Args:
            text: str | None : 원본 검색어 (trim 후 저장)
        """
        if text is None or not text.strip():
            return
        keyword = text.strip()
        try:
            self.table.increment(keyword)
            self.ring.push(QueryEvent(keyword=keyword))
        except Exception:
            logger.exception("failed to record query: keyword=%s", keyword)

    def get_popular(self, limit: int) -> List[PopularItem]:
        lim = normalize_popular_limit(limit, self.default_popular_limit)
        return [PopularItem(keyword=k, count=c) for k, c in self.table.top(lim)]

    def get_recent(self, limit: int) -> List[RecentItem]:
        lim = normalize_recent_limit(limit, self.capacity)
        return [RecentItem(keyword=e.keyword, ts=e.timestamp) for e in self.ring.snapshot(lim)]


class DurableStatsService(StatsPort):
    """
    search_log 인덱스 기반 통계.
    문서 적재는 검색 로그 파이프라인(SearchLogService)이 담당하므로
    record_query 는 아무 것도 하지 않는다. 조회 실패는 그대로 전파한다.
    """

    KEYWORD_FIELD = "keyword.keyword"
    TIMESTAMP_FIELD = "timestamp"

    def __init__(
        self,
        backend: SearchBackendPort,
        index: str,
        recent_max: int = DEFAULT_RECENT_MAX,
        default_popular_limit: int = DEFAULT_POPULAR_LIMIT) -> None:
        self._backend = backend
        self.index = index
        self.recent_max = recent_max
        self.default_popular_limit = default_popular_limit

    def record_query(self, text: str | None) -> None:
        return None

    def get_popular(self, limit: int) -> List[PopularItem]:
        lim = normalize_popular_limit(limit, self.default_popular_limit)
        buckets = self._backend.execute_terms_aggregation(self.index, self.KEYWORD_FIELD, lim)
        items = [PopularItem(keyword=term, count=count) for term, count in buckets]
        logger.info("popular keywords from %s: %d", self.index, len(items))
        return items

    def get_recent(self, limit: int) -> List[RecentItem]:
        lim = normalize_recent_limit(limit, self.recent_max)
        docs = self._backend.execute_sorted_search(self.index, self.TIMESTAMP_FIELD, "desc", lim)
        items = []
        for src in docs:
            keyword = src.get("keyword")
            if not keyword:
                continue
            items.append(RecentItem(keyword=keyword, ts=_as_millis(src.get(self.TIMESTAMP_FIELD))))
        logger.info("recent keywords from %s: %d", self.index, len(items))
        return items


class FallbackStatsService(StatsPort):
    """
    primary(durable) 조회가 실패하면 로그를 남기고 fallback(live) 결과를 반환한다.
    기록은 항상 fallback 에도 반영해서 대체 조회가 최신 상태를 유지하게 한다.
    """

    def __init__(self, primary: StatsPort, fallback: LiveStatsService) -> None:
        self.primary = primary
        self.fallback = fallback

    def record_query(self, text: str | None) -> None:
        self.fallback.record_query(text)
        try:
            self.primary.record_query(text)
        except Exception as e:
            logger.error("primary stats record failed: %s", e)

    def get_popular(self, limit: int) -> List[PopularItem]:
        lim = normalize_popular_limit(limit, self.fallback.default_popular_limit)
        try:
            return self.primary.get_popular(lim)
        except Exception as e:
            logger.error("durable popular keywords failed, using in-memory data: %s", e)
            return self.fallback.get_popular(lim)

    def get_recent(self, limit: int) -> List[RecentItem]:
        lim = normalize_recent_limit(limit, self.fallback.capacity)
        try:
            return self.primary.get_recent(lim)
        except Exception as e:
            logger.error("durable recent keywords failed, using in-memory data: %s", e)
            return self.fallback.get_recent(lim)


def create_stats_service(settings, backend: SearchBackendPort | None) -> StatsPort:
    """
    설정값으로 통계 전략을 고른다.
    - POPULAR_USE_OPENSEARCH=true : Fallback(Durable, Live)
    - POPULAR_USE_OPENSEARCH=false: Live
    """
    live = LiveStatsService(
        capacity=settings.RECENT_MAX,
        default_popular_limit=settings.DEFAULT_POPULAR_LIMIT)
    if not settings.POPULAR_USE_OPENSEARCH or backend is None:
        logger.info("stats source: in-memory (capacity=%d)", settings.RECENT_MAX)
        return live

    durable = DurableStatsService(
        backend,
        settings.SEARCH_LOG_INDEX,
        recent_max=settings.RECENT_MAX,
        default_popular_limit=settings.DEFAULT_POPULAR_LIMIT)
    logger.info("stats source: opensearch index=%s with in-memory fallback", settings.SEARCH_LOG_INDEX)
    return FallbackStatsService(durable, live)


def _as_millis(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        # strict_date_optional_time (ex. 2024-05-01T10:00:00Z)
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return 0
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return int(dt.timestamp() * 1000)
    return 0
