# search_proxy/app/domain/services/search_service.py
"""
SearchService
==============

검색 프록시 유스케이스.

Flow:
    TopicSource(업스트림) → flatten → paginate → {data, pagination}
    (요청이 이력 재실행이 아니면) SearchLog.append

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체는 adapters 레이어에서 주입(의존성 주입; DI)합니다.

예시:
    svc = SearchService(topics=DuckDuckGoSearcher(...), search_log=FileSearchLog(...))
    page = svc.search("python", page=2, limit=5)
    svc.record(SearchMethod.GET, "python", page=2, limit=5)
"""

from __future__ import annotations

import logging
from typing import List

from search_proxy.app.domain.ports import SearchLogPort, TopicSourcePort
from search_proxy.app.domain.models import SearchLogEntry, SearchMethod, SearchPage
from search_proxy.app.domain.pagination import empty_page, paginate
from search_proxy.app.domain.topics import flatten
from search_proxy.app.domain.utils import is_blank
from search_proxy.app.platform.exceptions import SearchQueryRequired

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_HISTORY_ITEMS = 10

class SearchService:

    def __init__(
        self,
        topics: TopicSourcePort,
        search_log: SearchLogPort) -> None:
        self._topics = topics
        self._search_log = search_log

    # ================= public API =================
    def search(
        self,
        query: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT) -> SearchPage:
        """
        업스트림에서 토픽 트리를 받아 평탄화 후 페이지를 잘라 반환한다.
        Args:
            query: str  : 검색어(공백뿐이면 SearchQueryRequired)
            page: int   : 1 이상 페이지 번호
            limit: int  : 1 이상 페이지 크기
        Returns:
            SearchPage
        """
        if is_blank(query):
            raise SearchQueryRequired()

        logger.info("service.search: query=%s page=%s limit=%s", query, page, limit,
                    extra={"search_query": query, "page": page, "limit": limit})
        raw_topics = self._topics.related_topics(query)
        if raw_topics is None:
            return empty_page()

        results = flatten(raw_topics)
        return paginate(results, page, limit)

    def record(
        self,
        method: SearchMethod,
        query: str,
        page: int | None = None,
        limit: int | None = None) -> None:
        """
        검색 이력을 1건 남긴다. page/limit 은 클라이언트가 보낸 경우에만 전달한다.
        """
        entry = SearchLogEntry(
            method=method,
            search_query=query,
            page_number=page,
            limit_number=limit,
        )
        self._search_log.append(entry)

    def history(self, items: int = DEFAULT_HISTORY_ITEMS) -> List[SearchLogEntry]:
        """최근 GET 검색 이력(최신순)."""
        return self._search_log.recent(items, SearchMethod.GET)
