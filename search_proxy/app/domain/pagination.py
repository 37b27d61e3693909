"""
평탄화된 결과 목록의 페이지 슬라이스와 메타데이터 계산.
"""

from __future__ import annotations

import math
from typing import Sequence

from search_proxy.app.domain.models import NormalizedResult, PageMetadata, SearchPage


def paginate(items: Sequence[NormalizedResult], page: int, page_size: int) -> SearchPage:
    """
    전체 결과에서 요청한 페이지를 잘라낸다.
    - total_pages = max(1, ceil(total_items / page_size))
    - 범위를 벗어난 페이지는 빈 슬라이스(에러 아님), current_page 는 요청값 그대로
    - page >= 1, page_size >= 1 은 호출자가 보장한다
    Args:
        items: Sequence[NormalizedResult] (평탄화된 전체 결과)
        page: int (1부터 시작)
        page_size: int
    Returns:
        SearchPage: {data, pagination}
    """
    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / page_size))

    offset = (page - 1) * page_size
    data = list(items[offset:offset + page_size]) if offset < total_items else []

    return SearchPage(
        data=data,
        pagination=PageMetadata(
            total_items=total_items,
            total_pages=total_pages,
            current_page=page,
            page_size=page_size,
            has_next_page=page < total_pages,
            has_previous_page=total_items > 0 and page > 1,
        ),
    )


def empty_page() -> SearchPage:
    """업스트림이 RelatedTopics 를 주지 않은 경우의 응답."""
    return SearchPage(
        data=[],
        pagination=PageMetadata(
            total_items=0,
            total_pages=1,
            current_page=1,
            page_size=0,
            has_next_page=False,
            has_previous_page=False,
        ),
    )
