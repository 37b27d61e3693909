"""
도메인 포트(추상 인터페이스).

SearchService(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from typing import Any, List, Protocol

from .models import SearchLogEntry, SearchMethod


class TopicSourcePort(Protocol):
    """업스트림 검색 API에서 원본 RelatedTopics 를 가져온다."""

    def related_topics(self, query: str) -> Any:
        """
        Args:
            query: 검색어
        Returns:
            Any: 역직렬화된 RelatedTopics 값. 응답이 비었거나 키가 없으면 None
        Raises:
            BackingServiceError: 업스트림 호출 실패
        """
        ...


class SearchLogPort(Protocol):
    """검색 이력을 append-only 로 저장/조회한다."""

    def append(self, entry: SearchLogEntry) -> None:
        ...

    def recent(self, items: int, method: SearchMethod = SearchMethod.GET) -> List[SearchLogEntry]:
        """
        Returns:
            List[SearchLogEntry]: method 가 일치하는 최신 항목부터 최대 items 개
        """
        ...
