from fastapi import APIRouter, BackgroundTasks, Depends, Query
from search_api.app.api.deps import (
    get_search_service, get_search_log_service, SearchService, SearchLogService
)
from search_api.app.models.schemas import SearchResponse
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.get(
    "",
    summary="상품 검색",
    description=(
        "검색어로 상품을 검색합니다. `field`로 검색 대상 필드"
        "(goods_name_chosung, goods_name, key_word, goods_code)를 지정할 수 있고, "
        "지정하지 않으면 가중치 멀티필드 검색을 수행합니다. 검색어가 없으면 전체 검색입니다."
    ),
    operation_id="searchGoods",
    status_code=200,
    response_model=SearchResponse,
    responses={
        200: {
            "description": "검색 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": {
                                "query": "운동화",
                                "size": 10,
                                "page": 1,
                                "total": 2,
                                "totalPages": 1,
                                "results": [
                                    {"goods_code": "G001", "goods_name": "러닝 운동화"},
                                    {"goods_code": "G002", "goods_name": "운동화 끈"},
                                ]
                            }
                        }
                    }
                }
            },
        },
        503: {"description": "검색 백엔드 장애"},
        500: {"description": "서버 내부 오류"},
    },
)
def search(
    background_tasks: BackgroundTasks,
    q: str | None = Query(None, description="검색어"),
    field: str | None = Query(None, description="검색 대상 필드"),
    size: int | None = Query(None, description="페이지 크기 (기본값: DEFAULT_PAGE_SIZE 설정)"),
    page: int | None = Query(None, description="1부터 시작하는 페이지 번호"),
    svc: SearchService = Depends(get_search_service),
    log_svc: SearchLogService = Depends(get_search_log_service),
):
    logger.info("SearchRequest: q=%s field=%s size=%s page=%s", q, field, size, page)
    # 인메모리 통계는 SearchService가 이미 기록했으므로 영구 저장만
    try:
        result = svc.search(q=q, field=field, size=size, page=page)
    except Exception:
        # 에러 응답에는 백그라운드 작업이 실행되지 않으므로 바로 적재
        log_svc.publish(q, None, False)
        raise
    background_tasks.add_task(log_svc.publish, q, None, False)
    return SearchResponse(
        query=result.query,
        size=result.size,
        page=result.page,
        total=result.total,
        totalPages=result.total_pages,
        results=result.results,
    )
