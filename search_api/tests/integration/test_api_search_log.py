from unittest.mock import MagicMock

from search_api.app.main import app
from search_api.app.api.deps import get_search_log_service, get_stats_service
from search_api.app.domain.services.search_log_service import SearchLogService
from search_api.app.domain.services.stats_service import LiveStatsService


def test_submit_search_log_feeds_shared_stats(client):
    """
    직접 제출한 검색 로그가 같은 통계 인스턴스에 반영되는지 검증
    """

    # given
    stats = LiveStatsService(capacity=20)
    writer = MagicMock()
    app.dependency_overrides[get_stats_service] = lambda: stats
    app.dependency_overrides[get_search_log_service] = lambda: SearchLogService(stats, writer)

    # when
    resp = client.post("/api/search-log", json={"keyword": " 모자 ", "user_id": "u1"})

    # then
    assert resp.status_code == 202
    body = resp.json()
    assert body["success"] is True
    assert body["data"] == {"keyword": "모자", "user_id": "u1"}
    assert writer.write.call_args.args[0].user_id == "u1"

    popular = client.get("/api/popular").json()
    assert popular["items"] == [{"keyword": "모자", "count": 1}]


def test_submit_blank_keyword_returns_400(client):
    svc = MagicMock()
    app.dependency_overrides[get_search_log_service] = lambda: svc

    resp = client.post("/api/search-log", json={"keyword": "   "})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_INPUT"
    svc.publish.assert_not_called()


def test_health(client):
    body = client.get("/health").json()
    assert body["ok"] is True
    assert body["app"]
