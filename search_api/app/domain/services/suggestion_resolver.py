"""
접두어 자동완성.

1) completion suggester (suggest 필드) → 결과가 있으면 그대로 반환
2) 폴백: 상품명/초성 필드 접두어 검색
"""

from __future__ import annotations

import logging
from typing import List

from search_api.app.domain.models import FieldRole
from search_api.app.domain.ports import SearchBackendPort
from search_api.app.domain.services.query_builder import build_prefix_fallback

logger = logging.getLogger(__name__)

DEFAULT_SUGGEST_LIMIT = 8


class SuggestionResolver:

    def __init__(
        self,
        backend: SearchBackendPort,
        index: str,
        suggest_field: str = "suggest",
        suggest_text_field: str = FieldRole.name.value) -> None:
        self._backend = backend
        self.index = index
        self.suggest_field = suggest_field
        self.suggest_text_field = suggest_text_field

    def suggest(self, prefix: str | None, limit: int = DEFAULT_SUGGEST_LIMIT) -> List[str]:
        """
        접두어로 시작하는 자동완성 후보를 반환한다.
        Args:
            prefix: str     : 입력 접두어 (trim 후 비어 있으면 빈 목록)
            limit: int      : 최대 개수 (0 이하이면 8)
        Returns:
            List[str]: 중복 없는 후보, 최대 limit 개
        Raises:
            BackendUnavailable: 폴백 검색까지 실패한 경우
        """
        pfx = "" if prefix is None else prefix.strip()
        size = DEFAULT_SUGGEST_LIMIT if limit is None or limit <= 0 else limit
        if not pfx:
            return []

        completions = self._complete(pfx, size)
        if completions:
            return completions
        return self._prefix_search(pfx, size)

    def _complete(self, pfx: str, size: int) -> List[str]:
        try:
            options = self._backend.execute_completion_suggest(
                self.index, self.suggest_field, pfx, size)
        except Exception as e:
            logger.warning("completion suggest failed, falling back to prefix search: %s", e)
            return []

        out: List[str] = []
        for text in options:
            if text and text not in out:
                out.append(text)
            if len(out) >= size:
                break
        return out

    def _prefix_search(self, pfx: str, size: int) -> List[str]:
        request = build_prefix_fallback(pfx, size, self.suggest_text_field)
        result = self._backend.execute_search(self.index, request.to_body())

        unique: dict[str, None] = {}
        for src in result.results:
            value = src.get(FieldRole.name.value)
            if value is None:
                value = src.get(self.suggest_text_field)
            if isinstance(value, str) and value.strip():
                unique.setdefault(value, None)
        suggestions = list(unique)[:size]
        logger.info("prefix suggest: prefix=%s kind=%s hits=%d returned=%d",
                    pfx, request.kind.value, len(result.results), len(suggestions))
        return suggestions
