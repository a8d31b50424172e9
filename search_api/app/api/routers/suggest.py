from fastapi import APIRouter, Depends, Query
from search_api.app.api.deps import get_suggest_service
from search_api.app.domain.services.suggest_service import SuggestService
from search_api.app.models.schemas import SuggestResponse
from search_api.app.platform.config import settings
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/suggest", tags=["suggest"])


@router.get(
    "",
    summary="검색어 자동완성",
    description=(
        "접두어로 시작하는 자동완성 후보를 반환합니다. 초성(ㄱㄴㄷ)만 입력해도 동작합니다. "
        "접두어가 없으면 최근 검색어와 인기 검색어를 섞어서 반환합니다."
    ),
    operation_id="suggestKeywords",
    response_model=SuggestResponse,
)
def suggest(
    prefix: str | None = Query(None, description="입력 접두어"),
    limit: int | None = Query(None, description="최대 개수 (기본 8)"),
    svc: SuggestService = Depends(get_suggest_service),
):
    lim = settings.DEFAULT_SUGGEST_LIMIT if limit is None else limit
    logger.info("SuggestRequest: prefix=%s limit=%s", prefix, lim)
    return SuggestResponse(suggestions=svc.suggest(prefix, lim))
