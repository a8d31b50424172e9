"""
검색 로그(SearchLogEntry)를 OpenSearch search_log 인덱스에 적재하는 SearchLogPort 구현체
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from opensearchpy import OpenSearch
from opensearchpy.exceptions import OpenSearchException
from search_api.app.domain.ports import SearchLogPort
from search_api.app.domain.models import SearchLogEntry
from search_api.app.platform.exceptions import BackendUnavailable

logger = logging.getLogger(__name__)


class OpenSearchSearchLogWriter(SearchLogPort):

    def __init__(self, client: OpenSearch, index_name: str) -> None:
        self.client = client
        self.index_name = index_name
        self._load_index_schema()

    def _load_index_schema(self) -> None:
        """
            인덱스 스키마를 JSON 파일에서 로드한다.
        """
        root_dir = Path(os.path.dirname(__file__)).resolve().parents[2]
        schema_path = root_dir / "resources/schema/search_log_index.json"
        with open(schema_path, 'r', encoding='utf-8') as f:
            self.index_schema = json.load(f)

    def ensure_index(self) -> bool:
        """
            search_log 인덱스가 없으면 로드된 스키마로 생성한다.

            Returns:
                bool: 새로 생성했으면 True, 이미 있으면 False
        """
        try:
            if self.client.indices.exists(index=self.index_name):
                logger.info("search log index '%s' already exists.", self.index_name)
                return False
            self.client.indices.create(index=self.index_name, body=self.index_schema)
        except OpenSearchException as e:
            raise BackendUnavailable("create-index", str(e)) from e
        logger.info("search log index '%s' created successfully.", self.index_name)
        return True

    def write(self, entry: SearchLogEntry) -> None:
        """
            검색 로그 1건을 색인한다. (문서 ID는 OpenSearch 가 생성)

            Args:
                entry: 검색 로그
        """
        document = entry.model_dump(mode="json", by_alias=True)
        try:
            self.client.index(index=self.index_name, body=document)
        except OpenSearchException as e:
            raise BackendUnavailable("index-search-log", str(e)) from e
