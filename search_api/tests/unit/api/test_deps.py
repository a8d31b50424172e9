import threading
import time
from types import SimpleNamespace
from unittest.mock import MagicMock

from starlette.datastructures import State

from search_api.app.api import deps
from search_api.app.domain.services.stats_service import LiveStatsService


def _request():
    return SimpleNamespace(app=SimpleNamespace(state=State()))


def test_stats_service_created_once_under_concurrent_requests(monkeypatch):
    """
    lifespan 없이 첫 요청이 동시에 들어와도 통계 서비스는 하나만 만들어져야 함
    """

    # given
    created = []

    def slow_create(settings, backend):
        time.sleep(0.05)
        svc = LiveStatsService(capacity=10)
        created.append(svc)
        return svc

    monkeypatch.setattr(deps, "create_stats_service", slow_create)
    request = _request()
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(deps.get_stats_service(request, backend=MagicMock()))

    # when
    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # then
    assert len(created) == 1
    assert all(svc is created[0] for svc in results)


def test_search_service_uses_default_page_size_setting(monkeypatch):
    monkeypatch.setattr(deps.settings, "DEFAULT_PAGE_SIZE", 25)

    svc = deps.get_search_service(backend=MagicMock(), stats=None)

    assert svc.default_size == 25
