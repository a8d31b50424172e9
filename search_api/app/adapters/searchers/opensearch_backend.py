"""
OpenSearch 로 검색/자동완성/집계를 수행하는 SearchBackendPort 구현체.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Tuple

from opensearchpy import OpenSearch
from opensearchpy.exceptions import OpenSearchException

from search_api.app.domain.models import JSONDict, SearchResult
from search_api.app.domain.ports import SearchBackendPort
from search_api.app.domain.services.query_builder import build_completion_suggest
from search_api.app.platform.exceptions import BackendUnavailable

logger = logging.getLogger(__name__)

SUGGEST_NAME = "auto-suggest"
AGG_NAME = "popular_keywords"


class OpenSearchBackend(SearchBackendPort):

    def __init__(self, client: OpenSearch) -> None:
        self.client = client

    def execute_search(self, index: str, body: JSONDict) -> SearchResult:
        """
        검색을 수행하여 전체 건수와 문서 목록을 반환한다.

        Args:
            index (str): 인덱스 이름
            body (dict): query_builder 가 만든 검색 바디
        Returns:
            SearchResult: total, results(_source 목록)
        """
        resp = self._search("search", index, body)
        hits = resp.get("hits") or {}
        total = _total_value(hits.get("total"))
        results = [h.get("_source") or {} for h in hits.get("hits") or []]
        return SearchResult(total=total, results=results)

    def execute_completion_suggest(
        self, index: str, field: str, prefix: str, size: int) -> List[str]:
        """
        completion suggester 옵션 텍스트를 백엔드 순서 그대로 반환한다.
        """
        body = build_completion_suggest(field, prefix, size, name=SUGGEST_NAME)
        resp = self._search("suggest-completion", index, body)
        texts: List[str] = []
        for entry in (resp.get("suggest") or {}).get(SUGGEST_NAME) or []:
            for option in entry.get("options") or []:
                text = option.get("text")
                if text:
                    texts.append(text)
        return texts

    def execute_terms_aggregation(
        self, index: str, field: str, size: int) -> List[Tuple[str, int]]:
        """
        terms 집계로 field 값별 문서 수 상위 size 개를 반환한다.
        """
        body = {
            "size": 0,
            "aggs": {
                AGG_NAME: {
                    "terms": {
                        "field": field,
                        "size": size,
                        "order": {"_count": "desc"},
                    }
                }
            },
        }
        resp = self._search("terms-aggregation", index, body)
        buckets = ((resp.get("aggregations") or {}).get(AGG_NAME) or {}).get("buckets") or []
        return [(str(b["key"]), int(b.get("doc_count", 0))) for b in buckets if "key" in b]

    def execute_sorted_search(
        self, index: str, sort_field: str, direction: str, size: int) -> List[JSONDict]:
        """
        sort_field 기준으로 정렬한 문서 상위 size 개를 반환한다.
        """
        body = {
            "size": size,
            "query": {"match_all": {}},
            "sort": [{sort_field: {"order": direction}}],
        }
        resp = self._search("sorted-search", index, body)
        hits = (resp.get("hits") or {}).get("hits") or []
        return [h["_source"] for h in hits if h.get("_source")]

    def _search(self, operation: str, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        started = time.perf_counter()
        try:
            resp = self.client.search(index=index, body=body)
        except OpenSearchException as e:
            logger.error("opensearch %s failed: index=%s error=%s", operation, index, e)
            raise BackendUnavailable(operation, str(e)) from e
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "opensearch %s: index=%s from=%s size=%s took=%sms elapsed=%.1fms",
            operation, index, body.get("from"), body.get("size"), resp.get("took"), elapsed_ms,
            extra={
                "operation": operation,
                "index": index,
                "took_ms": resp.get("took"),
                "elapsed_ms": round(elapsed_ms, 1),
            },
        )
        return resp


def _total_value(total: Any) -> int:
    # 7.x 이후: {"value": n, "relation": "eq"}, 이전: 정수
    if isinstance(total, dict):
        return int(total.get("value", 0))
    if isinstance(total, int):
        return total
    return 0
