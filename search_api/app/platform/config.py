from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv
import os

load_dotenv(os.getenv("ENV_FILE", ".env"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    APP_NAME: str = "goods-search-api"
    DEBUG: bool = False

    # 검색 백엔드
    OPENSEARCH_HOST: str = "http://localhost:9200"
    OPENSEARCH_INDEX: str = "goods"
    SEARCH_LOG_INDEX: str = "search_log"

    # 자동완성
    SUGGEST_FIELD: str = "suggest"
    SUGGEST_TEXT_FIELD: str = "goods_name"
    DEFAULT_SUGGEST_LIMIT: int = Field(8, gt=0)
    # 로컬 폴백에서 훑어볼 최근/인기 검색어 개수
    SUGGEST_LOCAL_WINDOW: int = Field(50, gt=0)

    # 인기/최근 검색어
    POPULAR_USE_OPENSEARCH: bool = True
    RECENT_MAX: int = Field(100, gt=0)
    DEFAULT_POPULAR_LIMIT: int = Field(10, gt=0)
    DEFAULT_PAGE_SIZE: int = Field(10, gt=0)

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"


settings = Settings()
