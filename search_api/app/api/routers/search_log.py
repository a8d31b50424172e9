from fastapi import APIRouter, BackgroundTasks, Depends, status
from search_api.app.api.deps import get_search_log_service, SearchLogService
from search_api.app.models.schemas import SearchLogRequest, ApiResponse
from search_api.app.platform.exceptions import InvalidInput
from search_api.app.platform.response import ok
from search_api.app.domain.services.search_log_service import ANONYMOUS

router = APIRouter(prefix="/search-log", tags=["search-log"])


@router.post(
    "",
    summary="검색 로그 제출",
    description="검색어 1건을 통계에 반영하고 search_log 인덱스에 비동기로 저장합니다.",
    operation_id="submitSearchLog",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ApiResponse,
    responses={400: {"description": "빈 검색어"}},
)
def submit(
    req: SearchLogRequest,
    background_tasks: BackgroundTasks,
    svc: SearchLogService = Depends(get_search_log_service),
):
    keyword = req.keyword.strip()
    if not keyword:
        raise InvalidInput("keyword must not be blank")
    background_tasks.add_task(svc.publish, keyword, req.user_id)
    return ok({"keyword": keyword, "user_id": req.user_id or ANONYMOUS}, message="accepted")
