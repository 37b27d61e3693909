from __future__ import annotations

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from search_proxy.app.api.routers import health, search
from search_proxy.app.api.deps import build_http_client
from search_proxy.app.platform.config import settings
from search_proxy.app.platform.logging import setup_logging
from search_proxy.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from search_proxy.app.platform import exceptions as domainex
from search_proxy.app.middlewares.request_context import RequestContextMiddleware
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # 업스트림 HTTP 클라이언트를 한 번만 생성해서 공유
    app.state.http_client = build_http_client()
    logger.info("%s started: upstream=%s", settings.APP_NAME, settings.DUCKDUCKGO_API_BASE_URL)
    try:
        yield
    finally:
        app.state.http_client.close()

app = FastAPI(title="Duck Search Proxy API", debug=settings.DEBUG, lifespan=lifespan)
app.include_router(health.router)
app.include_router(search.router, prefix="/api")

# Global Exception Filter
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("search_proxy.app.main:app", host="0.0.0.0", port=settings.PORT)
