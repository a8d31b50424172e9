from __future__ import annotations

import threading
from urllib.parse import urlparse

from fastapi import Depends, Request
from opensearchpy import OpenSearch

from search_api.app.domain.ports import SearchBackendPort, SearchLogPort, StatsPort
from search_api.app.domain.services.search_service import SearchService
from search_api.app.domain.services.search_log_service import SearchLogService
from search_api.app.domain.services.stats_service import create_stats_service
from search_api.app.domain.services.suggest_service import SuggestService
from search_api.app.domain.services.suggestion_resolver import SuggestionResolver
from search_api.app.adapters.searchers.opensearch_backend import OpenSearchBackend
from search_api.app.adapters.indexers.opensearch_search_log_writer import OpenSearchSearchLogWriter
from search_api.app.platform.config import settings

_stats_lock = threading.Lock()


# ---- 클라이언트 ----
def create_opensearch(host: str) -> OpenSearch:
    u = urlparse(host)
    return OpenSearch(
        hosts=[
            {"host": u.hostname, "port": u.port or 9200, "scheme": u.scheme or "http"}
        ],
        verify_certs=False,
    )


def get_opensearch(request: Request) -> OpenSearch:
    """
    앱 시작 시 main.py의 lifespan에서 만들어 넣어둔 OpenSearch 클라이언트를 꺼낸다.
    없으면(테스트 등) 즉석 생성해서 app.state 에 보관한다.
    """
    state = request.app.state
    if not hasattr(state, "opensearch"):
        state.opensearch = create_opensearch(settings.OPENSEARCH_HOST)
    return state.opensearch


def get_search_backend(os: OpenSearch = Depends(get_opensearch)) -> SearchBackendPort:
    return OpenSearchBackend(os)


def get_stats_service(
    request: Request,
    backend: SearchBackendPort = Depends(get_search_backend)) -> StatsPort:
    """
    프로세스 전체에서 하나뿐인 통계 서비스.
    링 버퍼/횟수 테이블이 요청 간에 공유되어야 하므로 app.state 에 한 번만 만든다.
    """
    state = request.app.state
    if not hasattr(state, "stats"):
        with _stats_lock:
            if not hasattr(state, "stats"):
                state.stats = create_stats_service(settings, backend)
    return state.stats


def get_search_log_writer(os: OpenSearch = Depends(get_opensearch)) -> SearchLogPort:
    return OpenSearchSearchLogWriter(os, settings.SEARCH_LOG_INDEX)


def get_search_service(
    backend: SearchBackendPort = Depends(get_search_backend),
    stats: StatsPort = Depends(get_stats_service)) -> SearchService:
    """
    FastAPI DI에서 검색 백엔드와 통계 서비스를 받아 SearchService를 생성해 주입한다.
    """
    return SearchService(
        backend, stats, settings.OPENSEARCH_INDEX, default_size=settings.DEFAULT_PAGE_SIZE)


def get_suggest_service(
    backend: SearchBackendPort = Depends(get_search_backend),
    stats: StatsPort = Depends(get_stats_service)) -> SuggestService:
    resolver = SuggestionResolver(
        backend,
        settings.OPENSEARCH_INDEX,
        suggest_field=settings.SUGGEST_FIELD,
        suggest_text_field=settings.SUGGEST_TEXT_FIELD)
    return SuggestService(resolver, stats, local_window=settings.SUGGEST_LOCAL_WINDOW)


def get_search_log_service(
    stats: StatsPort = Depends(get_stats_service),
    writer: SearchLogPort = Depends(get_search_log_writer)) -> SearchLogService:
    return SearchLogService(stats, writer)
