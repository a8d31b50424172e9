from fastapi import APIRouter, Depends, Query
from search_api.app.api.deps import get_stats_service
from search_api.app.domain.ports import StatsPort
from search_api.app.models.schemas import PopularResponse, RecentResponse
from search_api.app.platform.config import settings

router = APIRouter(tags=["stats"])


@router.get(
    "/popular",
    summary="인기 검색어",
    description="검색 횟수 내림차순 인기 검색어를 반환합니다. 영구 저장소 조회가 실패하면 인메모리 통계를 사용합니다.",
    operation_id="popularKeywords",
    response_model=PopularResponse,
)
def popular(
    limit: int | None = Query(None, description="최대 개수 (기본 10)"),
    stats: StatsPort = Depends(get_stats_service),
):
    lim = settings.DEFAULT_POPULAR_LIMIT if limit is None else limit
    return PopularResponse(items=stats.get_popular(lim))


@router.get(
    "/recent",
    summary="최근 검색어",
    description="최신순 최근 검색어를 반환합니다. 영구 저장소 조회가 실패하면 인메모리 통계를 사용합니다.",
    operation_id="recentKeywords",
    response_model=RecentResponse,
)
def recent(
    limit: int | None = Query(None, description="최대 개수 (기본 10)"),
    stats: StatsPort = Depends(get_stats_service),
):
    lim = settings.DEFAULT_POPULAR_LIMIT if limit is None else limit
    return RecentResponse(items=stats.get_recent(lim))
