from unittest.mock import MagicMock
import pytest

from search_api.app.main import app
from search_api.app.api.deps import get_suggest_service


@pytest.fixture
def mock_suggest_service():
    svc = MagicMock()
    svc.suggest.return_value = ["운동화", "운동복"]
    return svc


@pytest.fixture(autouse=True)
def override_dependency(mock_suggest_service):
    app.dependency_overrides[get_suggest_service] = lambda: mock_suggest_service
    yield
    app.dependency_overrides.clear()


def test_suggest_with_prefix(client, mock_suggest_service):
    resp = client.get("/api/suggest", params={"prefix": "운동", "limit": 5})

    assert resp.status_code == 200
    assert resp.json() == {"suggestions": ["운동화", "운동복"]}
    mock_suggest_service.suggest.assert_called_once_with("운동", 5)


def test_suggest_default_limit(client, mock_suggest_service):
    resp = client.get("/api/suggest")

    assert resp.status_code == 200
    mock_suggest_service.suggest.assert_called_once_with(None, 8)
