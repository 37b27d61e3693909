from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from typing import List
from search_proxy.app.api.deps import get_search_service, SearchService
from search_proxy.app.domain.models import SearchLogEntry, SearchMethod, SearchPage
from search_proxy.app.domain.utils import is_blank, parse_positive_int
from search_proxy.app.platform.config import settings
from search_proxy.app.platform.exceptions import ParamMustBePositiveNumber, SearchQueryRequired
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

class SearchRequest(BaseModel):
    query: str | None = Field(None, description="검색어")
    page: int | None = Field(None, description="페이지 번호(1부터)")
    limit: int | None = Field(None, description="페이지당 결과 개수")
    history: bool = Field(False, description="이력에서 다시 실행한 검색인지 여부(true면 이력에 남기지 않음)")

SEARCH_RESPONSES = {
    200: {
        "description": "검색 성공",
        "content": {
            "application/json": {
                "examples": {
                    "basic": {
                        "summary": "기본 검색 예시",
                        "value": {
                            "data": [
                                {
                                    "url": "https://duckduckgo.com/Python_(programming_language)",
                                    "title": "Python (programming language) A general-purpose programming language.",
                                }
                            ],
                            "pagination": {
                                "totalItems": 21,
                                "totalPages": 3,
                                "currentPage": 1,
                                "pageSize": 10,
                                "hasNextPage": True,
                                "hasPreviousPage": False,
                            },
                        },
                    }
                }
            }
        },
    },
    400: {"description": "검색어 누락 또는 page/limit 값 오류"},
    502: {"description": "DuckDuckGo API 호출 실패"},
    500: {"description": "서버 내부 오류"},
}


def _require_query(query: str | None) -> str:
    if is_blank(query):
        raise SearchQueryRequired()
    return query


def _optional_positive(name: str, raw: str | None) -> int | None:
    """쿼리스트링 값이 있으면 1 이상의 정수여야 한다."""
    if raw is None or raw == "":
        return None
    number = parse_positive_int(raw)
    if number is None:
        raise ParamMustBePositiveNumber(name)
    return number


@router.get(
    "",
    summary="DuckDuckGo 검색(GET)",
    description=(
        "DuckDuckGo RelatedTopics 를 평탄화해 페이지 단위로 반환합니다. "
        "`history=true`이면 이력에서 다시 실행한 검색으로 보고 이력에 남기지 않습니다."
    ),
    operation_id="searchGet",
    status_code=200,
    response_model=SearchPage,
    responses=SEARCH_RESPONSES,
)
def search_get(
    query: str | None = Query(None, description="검색어"),
    page: str | None = Query(None, description="페이지 번호(1부터)"),
    limit: str | None = Query(None, description="페이지당 결과 개수"),
    history: str | None = Query(None, description="이력 재실행 여부('true')"),
    svc: SearchService = Depends(get_search_service),
):
    search_query = _require_query(query)
    page_number = _optional_positive("page", page)
    limit_number = _optional_positive("limit", limit)
    from_history = history == "true"

    logger.info("GET search: query=%s page=%s limit=%s history=%s", search_query, page, limit, from_history)
    result = svc.search(
        search_query,
        page=page_number or 1,
        limit=limit_number or settings.DEFAULT_PAGE_SIZE,
    )

    if not from_history:
        svc.record(SearchMethod.GET, search_query, page=page_number, limit=limit_number)
    return result


@router.post(
    "",
    summary="DuckDuckGo 검색(POST)",
    description="GET 검색과 같은 결과를 JSON 바디 요청으로 반환합니다.",
    operation_id="searchPost",
    status_code=200,
    response_model=SearchPage,
    responses=SEARCH_RESPONSES,
)
def search_post(req: SearchRequest, svc: SearchService = Depends(get_search_service)):
    logger.info(f"SearchRequest: {req}")
    search_query = _require_query(req.query)
    # 0 은 '미지정'으로 보고 기본값을 쓴다. 음수만 거부
    if req.page is not None and req.page < 0:
        raise ParamMustBePositiveNumber("page")
    if req.limit is not None and req.limit < 0:
        raise ParamMustBePositiveNumber("limit")

    result = svc.search(
        search_query,
        page=req.page or 1,
        limit=req.limit or settings.DEFAULT_PAGE_SIZE,
    )

    if not req.history:
        svc.record(SearchMethod.POST, search_query, page=req.page, limit=req.limit)
    return result


@router.get(
    "/history",
    summary="검색 이력",
    description="GET 으로 실행된 최근 검색 이력을 최신순으로 반환합니다.",
    operation_id="searchHistory",
    status_code=200,
    response_model=List[SearchLogEntry],
    response_model_exclude_none=True,
    responses={
        200: {
            "description": "이력 조회 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "최근 이력 예시",
                            "value": [
                                {"timestamp": "2025-06-10T11:30:00.000Z", "method": "GET", "searchQuery": "one"},
                                {"timestamp": "2025-06-10T11:25:00.000Z", "method": "GET", "searchQuery": "two",
                                 "pageNumber": 1, "limitNumber": 2},
                            ],
                        }
                    }
                }
            },
        },
        400: {"description": "items 값 오류"},
        500: {"description": "서버 내부 오류"},
    },
)
def search_history(
    items: str | None = Query(None, description="조회할 이력 개수"),
    svc: SearchService = Depends(get_search_service),
):
    items_to_show = _optional_positive("items", items) or settings.DEFAULT_HISTORY_ITEMS
    return svc.history(items_to_show)
