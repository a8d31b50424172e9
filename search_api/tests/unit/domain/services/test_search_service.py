from unittest.mock import MagicMock
import pytest

from search_api.app.domain.models import SearchResult
from search_api.app.domain.services.search_service import SearchService
from search_api.app.domain.services.stats_service import LiveStatsService
from search_api.app.platform.exceptions import BackendUnavailable


@pytest.fixture
def mock_backend():
    backend = MagicMock()
    backend.execute_search.return_value = SearchResult(total=0, results=[])
    return backend


@pytest.fixture
def stats():
    return LiveStatsService(capacity=20)


@pytest.fixture
def service(mock_backend, stats):
    return SearchService(mock_backend, stats, index="goods")


def test_search_builds_multi_match_and_records_query(service, mock_backend, stats):
    """
    필드 미지정 검색은 멀티필드 쿼리로 실행되고 검색어가 통계에 기록되어야 함
    """

    # given
    mock_backend.execute_search.return_value = SearchResult(
        total=95, results=[{"goods_name": "운동화"}])

    # when
    page = service.search(q="운동화", field=None, size=10, page=1)

    # then
    index, body = mock_backend.execute_search.call_args.args
    assert index == "goods"
    assert "multi_match" in body["query"]
    assert body["from"] == 0
    assert body["size"] == 10
    assert page.total == 95
    assert page.total_pages == 10
    assert page.results == [{"goods_name": "운동화"}]
    assert [p.keyword for p in stats.get_popular(10)] == ["운동화"]


def test_search_pagination_offset(service, mock_backend):
    page = service.search(q="shoe", size=20, page=3)

    body = mock_backend.execute_search.call_args.args[1]
    assert body["from"] == 40
    assert body["size"] == 20
    assert page.page == 3


@pytest.mark.parametrize("page_no", [0, -1, None])
def test_search_page_below_one_is_first_page(service, mock_backend, page_no):
    page = service.search(q="shoe", size=10, page=page_no)

    assert page.page == 1
    assert mock_backend.execute_search.call_args.args[1]["from"] == 0


def test_search_defaults_and_empty_result(service, mock_backend, stats):
    page = service.search(q=None)

    body = mock_backend.execute_search.call_args.args[1]
    assert body["query"] == {"match_all": {}}
    assert page.size == 10
    assert page.total == 0
    assert page.total_pages == 1
    # 빈 검색어는 기록하지 않음
    assert stats.get_recent(10) == []


def test_search_with_field(service, mock_backend):
    service.search(q="ㅇㄷㅎ", field="goods_name_chosung")

    body = mock_backend.execute_search.call_args.args[1]
    assert body["query"] == {"match_phrase_prefix": {"goods_name_chosung": {"query": "ㅇㄷㅎ"}}}


def test_search_without_recording(service, stats):
    service.search(q="shoe", record=False)

    assert stats.get_popular(10) == []


def test_search_propagates_backend_error(service, mock_backend, stats):
    """
    검색 백엔드가 예외를 던지면 서비스도 그대로 전파해야 함 (검색어 기록은 유지)
    """
    mock_backend.execute_search.side_effect = BackendUnavailable("search", "opensearch down")

    with pytest.raises(BackendUnavailable) as ei:
        service.search("네이버", size=5)

    assert "opensearch down" in str(ei.value)
    assert [r.keyword for r in stats.get_recent(10)] == ["네이버"]


@pytest.mark.parametrize("size", [None, 0, -3])
def test_search_uses_configured_default_size(mock_backend, stats, size):
    """
    size 가 없거나 0 이하이면 설정된 기본 페이지 크기로 검색해야 함
    """
    service = SearchService(mock_backend, stats, index="goods", default_size=25)

    page = service.search(q="shoe", size=size, page=2)

    body = mock_backend.execute_search.call_args.args[1]
    assert body["size"] == 25
    assert body["from"] == 25
    assert page.size == 25
