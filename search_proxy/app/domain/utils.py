"""
유틸리티 함수.
"""

from typing import Any
import re


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def normalize_text(value: Any) -> str | None:
    """
    결과 필드 값을 정규화하는 함수.
    None, 문자열이 아닌 값, 공백뿐인 문자열은 '없음(None)'으로 취급한다.
    Args:
        value: Any (업스트림 원본 값)
    Returns:
        str | None: 비어 있지 않은 원본 문자열 또는 None
    """
    if not isinstance(value, str):
        return None
    if value.strip() == "":
        return None
    return value


def parse_positive_int(value: str | None) -> int | None:
    """
    쿼리스트링 숫자 파라미터를 파싱하는 함수.
    앞쪽 정수 부분만 읽는다('2abc' -> 2). 정수가 없거나 1 미만이면 None.
    Args:
        value: str | None (쿼리 파라미터 원본)
    Returns:
        int | None: 1 이상의 정수 또는 None
    """
    if value is None:
        return None
    m = _LEADING_INT.match(value)
    if not m:
        return None
    number = int(m.group(1))
    return number if number >= 1 else None


def is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""
