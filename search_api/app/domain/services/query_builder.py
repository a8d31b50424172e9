"""
검색어 + 필드 선택을 OpenSearch 검색 요청으로 바꾸는 쿼리 빌더.

외부 호출이 없는 순수 변환이며, 실행은 SearchBackendPort 가 담당한다.
"""

from __future__ import annotations

from typing import Any, Dict, List

from search_api.app.domain.models import FieldRole, QueryKind, StructuredQuery
from search_api.app.domain.utils import is_chosung_only, resolve_field_role

MATCH_ALL = "*"
DEFAULT_SIZE = 10

# 기본 멀티필드 검색 대상과 가중치
MULTI_MATCH_FIELDS: List[str] = [
    f"{FieldRole.name.value}^2",
    f"{FieldRole.chosung.value}^3",
    "description",
    "category",
]


def build_search(
    keyword: str | None,
    field: str | None = None,
    size: int = DEFAULT_SIZE,
    from_: int = 0) -> StructuredQuery:
    """
    검색 쿼리를 구성한다.

    - 빈 검색어 → match_all (필드 선택 무시)
    - 초성 필드 → match_phrase_prefix
    - 상품명/키워드 필드 → match (operator=and)
    - 상품코드 필드 → match
    - 그 외/미지정 → 가중치 multi_match (best_fields, operator=and)

    Args:
        keyword (str | None): 검색어
        field (str | None): 검색 대상 필드명
        size (int): 페이지 크기 (0 이하이면 10)
        from_ (int): 시작 오프셋 (음수이면 0)
    Returns:
        StructuredQuery: 쿼리 유형과 검색 바디
    """
    page_size = DEFAULT_SIZE if size is None or size <= 0 else size
    start = max(0, from_ or 0)
    q = MATCH_ALL if keyword is None or not keyword.strip() else keyword.strip()

    if q == MATCH_ALL:
        return StructuredQuery(
            kind=QueryKind.match_all, query={"match_all": {}}, from_=start, size=page_size)

    kind, query = _field_query(q, resolve_field_role(field))
    return StructuredQuery(kind=kind, query=query, from_=start, size=page_size)


def _field_query(q: str, role: FieldRole | None) -> tuple[QueryKind, Dict[str, Any]]:
    match role:
        case FieldRole.chosung:
            return QueryKind.phrase_prefix, phrase_prefix(role.value, q)
        case FieldRole.name | FieldRole.keyword:
            return QueryKind.field_match, {
                "match": {role.value: {"query": q, "operator": "and"}}
            }
        case FieldRole.code:
            return QueryKind.field_match, {"match": {role.value: {"query": q}}}
        case _:
            return QueryKind.multi_match, {
                "multi_match": {
                    "query": q,
                    "fields": list(MULTI_MATCH_FIELDS),
                    "type": "best_fields",
                    "operator": "and",
                }
            }


def phrase_prefix(field: str, text: str) -> Dict[str, Any]:
    return {"match_phrase_prefix": {field: {"query": text}}}


def build_prefix_fallback(prefix: str, size: int, text_field: str) -> StructuredQuery:
    """
    자동완성 폴백용 접두어 검색.
    초성만 입력했으면 초성 필드만, 아니면 상품명 OR 초성 필드로 찾는다.
    """
    if is_chosung_only(prefix):
        kind = QueryKind.phrase_prefix
        query = phrase_prefix(FieldRole.chosung.value, prefix)
    else:
        kind = QueryKind.bool_prefix
        query = {
            "bool": {
                "should": [
                    phrase_prefix(FieldRole.name.value, prefix),
                    phrase_prefix(FieldRole.chosung.value, prefix),
                ]
            }
        }
    includes = [FieldRole.name.value]
    if text_field and text_field not in includes:
        includes.append(text_field)
    return StructuredQuery(kind=kind, query=query, from_=0, size=size, source_includes=includes)


def build_completion_suggest(field: str, prefix: str, size: int, name: str = "auto-suggest") -> Dict[str, Any]:
    """completion suggester 요청 바디 (문서 자체는 가져오지 않는다)."""
    return {
        "size": 0,
        "suggest": {
            name: {
                "prefix": prefix,
                "completion": {
                    "field": field,
                    "skip_duplicates": True,
                    "size": size,
                },
            }
        },
    }
