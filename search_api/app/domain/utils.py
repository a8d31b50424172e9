"""
유틸리티 함수.
"""

import math

from search_api.app.domain.models import FieldRole

# Hangul Compatibility Jamo 자음 범위: ㄱ(U+3131) ~ ㅎ(U+314E)
CHOSUNG_FIRST = "ㄱ"
CHOSUNG_LAST = "ㅎ"


def is_chosung_only(text: str | None) -> bool:
    """
    공백을 제외한 모든 문자가 한글 초성(자음 자모)인지 검사하는 함수.
    Args:
        text: str (검색어)
    Returns:
        bool: 초성으로만 이루어졌으면 True, 빈 문자열/공백이면 False
    """
    if text is None or not text.strip():
        return False
    for ch in text:
        if ch.isspace():
            continue
        if ch < CHOSUNG_FIRST or ch > CHOSUNG_LAST:
            return False
    return True


def resolve_field_role(field: str | None) -> FieldRole | None:
    """
    요청 파라미터의 필드명을 FieldRole로 변환하는 함수.
    Args:
        field: str (필드명, 없거나 모르는 값이면 None)
    Returns:
        FieldRole | None
    """
    if field is None or not field.strip():
        return None
    try:
        return FieldRole(field.strip())
    except ValueError:
        return None


def page_offset(page: int | None, size: int) -> int:
    """1부터 시작하는 페이지 번호를 from 오프셋으로 바꾼다. page < 1 은 1로 본다."""
    if page is None or page < 1:
        page = 1
    return (page - 1) * size


def total_pages(total: int, size: int) -> int:
    """
    전체 페이지 수. 결과가 없어도 최소 1페이지.
    Args:
        total: int (전체 건수)
        size: int (페이지 크기)
    Returns:
        int: ceil(total / size), 최소 1
    """
    if size <= 0:
        return 1
    return max(1, math.ceil(total / size))
