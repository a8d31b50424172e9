"""
인메모리(실시간) 검색어 저장소.

- RecencyRing: 최근 검색어를 최신순으로 최대 capacity 개까지 보관
- FrequencyTable: 검색어별 누적 횟수
여러 요청 스레드가 동시에 읽고 쓰므로 내부 상태는 lock 으로 보호한다.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, List, Tuple

from search_api.app.domain.models import QueryEvent


class RecencyRing:

    def __init__(self, capacity: int = 100) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive: {capacity}")
        self._capacity = capacity
        self._events: Deque[QueryEvent] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, event: QueryEvent) -> None:
        """앞쪽(최신)에 넣고, capacity 를 넘으면 뒤쪽(가장 오래된)부터 제거한다."""
        with self._lock:
            self._events.appendleft(event)
            while len(self._events) > self._capacity:
                self._events.pop()

    def snapshot(self, limit: int | None = None) -> List[QueryEvent]:
        """최신순 복사본. limit 이 없으면 전체."""
        with self._lock:
            items = list(self._events)
        return items if limit is None else items[:max(0, limit)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class FrequencyTable:

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, keyword: str) -> int:
        """없으면 1로 만들고, 있으면 1 증가. 증가 후 값을 반환."""
        with self._lock:
            count = self._counts.get(keyword, 0) + 1
            self._counts[keyword] = count
            return count

    def count(self, keyword: str) -> int:
        with self._lock:
            return self._counts.get(keyword, 0)

    def top(self, limit: int) -> List[Tuple[str, int]]:
        """
        횟수 내림차순 상위 limit 개.
        횟수가 같으면 검색어 오름차순으로 고정한다.
        """
        with self._lock:
            entries = list(self._counts.items())
        entries.sort(key=lambda kv: (-kv[1], kv[0]))
        return entries[:max(0, limit)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)
