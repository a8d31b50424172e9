import pytest

from search_api.app.domain.models import QueryKind
from search_api.app.domain.services.query_builder import (
    build_search, build_prefix_fallback, build_completion_suggest, MULTI_MATCH_FIELDS
)


@pytest.mark.parametrize("keyword", [None, "", "   ", "*"])
@pytest.mark.parametrize("field", [None, "goods_name", "goods_name_chosung"])
def test_blank_keyword_is_match_all_regardless_of_field(keyword, field):
    q = build_search(keyword, field, 10, 0)

    assert q.kind is QueryKind.match_all
    assert q.query == {"match_all": {}}


def test_chosung_field_is_phrase_prefix():
    q = build_search("ㅇㄷㅎ", "goods_name_chosung", 10, 0)

    assert q.kind is QueryKind.phrase_prefix
    assert q.query == {"match_phrase_prefix": {"goods_name_chosung": {"query": "ㅇㄷㅎ"}}}


@pytest.mark.parametrize("field", ["goods_name", "key_word"])
def test_name_and_keyword_fields_use_and_operator(field):
    q = build_search(" 러닝 운동화 ", field, 10, 0)

    assert q.kind is QueryKind.field_match
    assert q.query == {"match": {field: {"query": "러닝 운동화", "operator": "and"}}}


def test_code_field_uses_default_operator():
    q = build_search("G001", "goods_code", 10, 0)

    assert q.kind is QueryKind.field_match
    assert q.query == {"match": {"goods_code": {"query": "G001"}}}


@pytest.mark.parametrize("field", [None, "", "  ", "price"])
def test_default_is_boosted_multi_match(field):
    q = build_search("shoe", field, 10, 0)

    assert q.kind is QueryKind.multi_match
    mm = q.query["multi_match"]
    assert mm["query"] == "shoe"
    assert mm["fields"] == ["goods_name^2", "goods_name_chosung^3", "description", "category"]
    assert mm["fields"] == MULTI_MATCH_FIELDS
    assert mm["type"] == "best_fields"
    assert mm["operator"] == "and"


def test_pagination_is_normalized():
    q = build_search("shoe", None, 0, -20)
    assert q.size == 10
    assert q.from_ == 0

    q = build_search("shoe", None, 25, 50)
    body = q.to_body()
    assert body["size"] == 25
    assert body["from"] == 50


def test_prefix_fallback_for_chosung_only_searches_chosung_field():
    q = build_prefix_fallback("ㄱㄴ", 5, "goods_name")

    assert q.kind is QueryKind.phrase_prefix
    assert q.query == {"match_phrase_prefix": {"goods_name_chosung": {"query": "ㄱㄴ"}}}
    assert q.size == 5
    assert q.source_includes == ["goods_name"]


def test_prefix_fallback_for_text_uses_bool_should():
    q = build_prefix_fallback("운동", 8, "display_name")

    assert q.kind is QueryKind.bool_prefix
    shoulds = q.query["bool"]["should"]
    assert shoulds == [
        {"match_phrase_prefix": {"goods_name": {"query": "운동"}}},
        {"match_phrase_prefix": {"goods_name_chosung": {"query": "운동"}}},
    ]
    assert q.to_body()["_source"] == {"includes": ["goods_name", "display_name"]}


def test_completion_suggest_body():
    body = build_completion_suggest("suggest", "운", 4)

    assert body["size"] == 0
    sug = body["suggest"]["auto-suggest"]
    assert sug["prefix"] == "운"
    assert sug["completion"] == {"field": "suggest", "skip_duplicates": True, "size": 4}
