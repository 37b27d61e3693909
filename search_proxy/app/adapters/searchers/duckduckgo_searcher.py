"""
DuckDuckGo Instant Answer API에서 RelatedTopics 를 가져오는 TopicSourcePort 구현체.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from search_proxy.app.domain.ports import TopicSourcePort
from search_proxy.app.domain.utils import is_blank
from search_proxy.app.platform.exceptions import SearchQueryRequired, UpstreamSearchFailed

logger = logging.getLogger(__name__)

RELATED_TOPICS_KEY = "RelatedTopics"

class DuckDuckGoSearcher(TopicSourcePort):

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")

    def related_topics(self, query: str) -> Any:
        """
        DuckDuckGo API를 호출하여 원본 RelatedTopics 값을 반환한다.
        응답 JSON 이 비어 있거나 RelatedTopics 가 없으면(null/빈 문자열 포함) None.

        Args:
            query (str): 검색어
        Returns:
            Any: RelatedTopics 원본 값 또는 None
        Raises:
            SearchQueryRequired: 검색어가 비어 있음
            UpstreamSearchFailed: 네트워크/HTTP 상태/JSON 디코딩 실패
        """
        if is_blank(query):
            raise SearchQueryRequired()

        try:
            response = self.client.get(f"{self.base_url}/", params=self._build_params(query))
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error trying get DuckDuckGo API data: %s", e)
            raise UpstreamSearchFailed(str(e)) from e

        if not isinstance(payload, dict) or len(payload) == 0:
            return None

        related = payload.get(RELATED_TOPICS_KEY)
        # 빈 리스트는 '결과 0건'으로 보고 그대로 넘긴다
        if not related and not isinstance(related, (list, dict)):
            return None
        return related

    def _build_params(self, query: str) -> dict[str, str]:
        """
        Args:
            query (str): 검색어
        Returns:
            dict[str, str]: 쿼리스트링 파라미터(q, format=json)
        """
        return {"q": query, "format": "json"}
