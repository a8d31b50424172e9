from fastapi import APIRouter

from search_api.app.platform.config import settings

router = APIRouter(prefix="/health", tags=["health"])

@router.get("", summary="헬스 체크")
def health():
    return {"ok": True, "app": settings.APP_NAME}
