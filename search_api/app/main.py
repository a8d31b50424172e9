from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from search_api.app.api.routers import (
    health,
    search,
    stats,
    suggest,
    search_log,
)
from search_api.app.api.deps import create_opensearch
from search_api.app.adapters.searchers.opensearch_backend import OpenSearchBackend
from search_api.app.adapters.indexers.opensearch_search_log_writer import OpenSearchSearchLogWriter
from search_api.app.domain.services.stats_service import create_stats_service
from search_api.app.platform.config import settings
from search_api.app.platform.logging import setup_logging
from search_api.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from search_api.app.platform import exceptions as domainex
from search_api.app.middlewares.request_context import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # OpenSearch 클라이언트와 통계 서비스는 한 번만 생성해서 공유
    app.state.opensearch = create_opensearch(settings.OPENSEARCH_HOST)
    app.state.stats = create_stats_service(settings, OpenSearchBackend(app.state.opensearch))

    # search_log 인덱스가 없으면 생성 (실패해도 기동은 계속)
    try:
        OpenSearchSearchLogWriter(app.state.opensearch, settings.SEARCH_LOG_INDEX).ensure_index()
    except Exception as e:
        logger.error("search log index initialization failed: %s", e)

    try:
        yield
    finally:
        try:
            app.state.opensearch.close()
        except Exception as e:
            logger.warning("failed to close opensearch client: %s", e)

app = FastAPI(title="Goods Search API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(search.router, prefix="/api")
app.include_router(stats.router, prefix="/api")
app.include_router(suggest.router, prefix="/api")
app.include_router(search_log.router, prefix="/api")

# Global Exception Filter
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)
