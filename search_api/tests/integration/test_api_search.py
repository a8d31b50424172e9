from unittest.mock import MagicMock
import pytest

from search_api.app.main import app
from search_api.app.api.deps import get_search_service, get_search_log_service
from search_api.app.domain.models import SearchPage
from search_api.app.platform.exceptions import BackendUnavailable, DomainError


@pytest.fixture
def mock_search_service():
    svc = MagicMock()
    svc.search.return_value = SearchPage(
        query="운동화", size=10, page=1, total=1, total_pages=1,
        results=[{"goods_code": "G001", "goods_name": "러닝 운동화"}],
    )
    return svc


@pytest.fixture
def mock_log_service():
    return MagicMock()


@pytest.fixture(autouse=True)
def override_dependency(mock_search_service, mock_log_service):
    app.dependency_overrides[get_search_service] = lambda: mock_search_service
    app.dependency_overrides[get_search_log_service] = lambda: mock_log_service
    yield
    app.dependency_overrides.clear()


def test_search_defaults(client, mock_search_service, mock_log_service):
    """
    파라미터 없이 호출하면 None 으로 넘겨 서비스 기본값을 쓰는지 검증
    """
    resp = client.get("/api/search")

    assert resp.status_code == 200
    mock_search_service.search.assert_called_once_with(q=None, field=None, size=None, page=None)
    mock_log_service.publish.assert_called_once_with(None, None, False)


def test_search_with_params(client, mock_search_service, mock_log_service):
    mock_search_service.search.return_value = SearchPage(
        query="운동화", size=10, page=2, total=95, total_pages=10, results=[],
    )

    resp = client.get("/api/search", params={"q": "운동화", "field": "goods_name", "size": 10, "page": 2})

    assert resp.status_code == 200
    body = resp.json()
    assert body["query"] == "운동화"
    assert body["page"] == 2
    assert body["total"] == 95
    assert body["totalPages"] == 10
    assert body["results"] == []
    assert resp.headers["X-Request-ID"]
    mock_search_service.search.assert_called_once_with(q="운동화", field="goods_name", size=10, page=2)
    mock_log_service.publish.assert_called_once_with("운동화", None, False)


def test_search_keeps_request_id(client):
    resp = client.get("/api/search", params={"q": "a"}, headers={"X-Request-ID": "rid-1"})

    assert resp.headers["X-Request-ID"] == "rid-1"


def test_search_backend_unavailable_returns_503(client, mock_search_service):
    """
    검색 백엔드 장애는 폴백 없이 503 에러 응답으로 내려와야 함
    """
    mock_search_service.search.side_effect = BackendUnavailable("search", "opensearch down")

    resp = client.get("/api/search", params={"q": "신한은행"})

    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "BACKEND_UNAVAILABLE"


def test_search_domain_error_returns_400(client, mock_search_service):
    mock_search_service.search.side_effect = DomainError("invalid query")

    resp = client.get("/api/search", params={"q": "신한은행"})
    assert resp.status_code == 400


def test_search_unexpected_error_returns_500(client, mock_search_service):
    mock_search_service.search.side_effect = RuntimeError("bug")

    resp = client.get("/api/search", params={"q": "신한은행"})
    assert resp.status_code == 500


def test_search_invalid_page_returns_422(client):
    resp = client.get("/api/search", params={"q": "a", "page": "abc"})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_search_failure_still_persists_search_log(client, mock_search_service, mock_log_service):
    """
    검색이 실패해도 인메모리에 기록된 검색어는 영구 저장소에도 적재되어야 함
    """
    mock_search_service.search.side_effect = BackendUnavailable("search", "opensearch down")

    resp = client.get("/api/search", params={"q": "신한은행"})

    assert resp.status_code == 503
    mock_log_service.publish.assert_called_once_with("신한은행", None, False)
