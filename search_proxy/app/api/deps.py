from __future__ import annotations

import httpx
from fastapi import Depends, Request

from search_proxy.app.domain.ports import SearchLogPort, TopicSourcePort
from search_proxy.app.domain.services.search_service import SearchService
from search_proxy.app.adapters.searchers.duckduckgo_searcher import DuckDuckGoSearcher
from search_proxy.app.adapters.history.file_search_log import FileSearchLog
from search_proxy.app.platform.config import settings


# ---- 클라이언트 ----
def build_http_client() -> httpx.Client:
    return httpx.Client(
        timeout=settings.DUCKDUCKGO_TIMEOUT,
        headers={"Accept": "application/json"},
        follow_redirects=True,
    )


def get_http_client(request: Request) -> httpx.Client:
    """
    앱 시작 시 main.py의 lifespan에서 만들어 넣어둔 httpx 클라이언트를 꺼낸다.
    없으면(테스트 등) 즉석 생성해서 app.state 에 보관한다.
    """
    if not hasattr(request.app.state, "http_client"):
        request.app.state.http_client = build_http_client()
    return request.app.state.http_client


def get_topic_source(client: httpx.Client = Depends(get_http_client)) -> TopicSourcePort:
    return DuckDuckGoSearcher(client, settings.DUCKDUCKGO_API_BASE_URL)


def get_search_log() -> SearchLogPort:
    return FileSearchLog(settings.SEARCH_LOG_FILE)


def get_search_service(
    topics: TopicSourcePort = Depends(get_topic_source),
    search_log: SearchLogPort = Depends(get_search_log),
) -> SearchService:
    """
    FastAPI DI에서 업스트림 검색기와 이력 저장소를 받아 SearchService를 생성해 주입한다.
    """
    return SearchService(topics=topics, search_log=search_log)
