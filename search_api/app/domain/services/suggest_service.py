"""
자동완성 API 오케스트레이션.

- 접두어 없음: 최근 검색어 + 인기 검색어를 섞어서 반환
- 접두어 있음: SuggestionResolver → 실패/빈 결과면 인메모리 검색어 접두어 필터
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from search_api.app.domain.ports import StatsPort
from search_api.app.domain.services.suggestion_resolver import (
    SuggestionResolver, DEFAULT_SUGGEST_LIMIT,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_WINDOW = 50


class SuggestService:

    def __init__(
        self,
        resolver: SuggestionResolver,
        stats: StatsPort,
        local_window: int = DEFAULT_LOCAL_WINDOW) -> None:
        self._resolver = resolver
        self._stats = stats
        self.local_window = local_window

    def suggest(self, prefix: str | None, limit: int = DEFAULT_SUGGEST_LIMIT) -> List[str]:
        size = DEFAULT_SUGGEST_LIMIT if limit is None or limit <= 0 else limit
        pfx = "" if prefix is None else prefix.strip()

        if not pfx:
            return self.mixed(size)

        try:
            found = self._resolver.suggest(pfx, size)
            if found:
                return found
        except Exception as e:
            logger.warning("suggest backend failed, using local keywords: prefix=%s error=%s", pfx, e)

        return self.local(pfx, size)

    def mixed(self, limit: int) -> List[str]:
        """최근 검색어 먼저, 그 다음 인기 검색어. 중복 제거 후 limit 개."""
        recent = (item.keyword for item in self._stats.get_recent(limit))
        popular = (item.keyword for item in self._stats.get_popular(limit))
        return _merge(limit, recent, popular)

    def local(self, prefix: str, limit: int) -> List[str]:
        """인메모리 최근/인기 검색어 중 접두어(대소문자 무시)로 시작하는 것."""
        lower = prefix.lower()
        recent = (i.keyword for i in self._stats.get_recent(self.local_window)
                  if i.keyword and i.keyword.lower().startswith(lower))
        popular = (i.keyword for i in self._stats.get_popular(self.local_window)
                   if i.keyword and i.keyword.lower().startswith(lower))
        return _merge(limit, recent, popular)


def _merge(limit: int, *sources: Iterable[str]) -> List[str]:
    unique: dict[str, None] = {}
    for source in sources:
        for keyword in source:
            if keyword:
                unique.setdefault(keyword, None)
    return list(unique)[:limit]
