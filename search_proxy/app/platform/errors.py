from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi import status
from search_proxy.app.platform.logging import request_id_ctx
from search_proxy.app.platform import exceptions as domainex
import logging

def error_envelope(message, code="BAD_REQUEST", details=None, trace_id=None):
    return {
        "success": False,
        "error": {
            "code": code, "message": message, "details": details
        },
        "trace_id": trace_id
    }

async def http_exception_handler(request: Request, exc: HTTPException):
    # 4xx, 5xx 에러
    return JSONResponse(status_code=exc.status_code,
                        content=error_envelope(
                            exc.detail,
                            code=f"HTTP_{exc.status_code}",
                            trace_id=request_id_ctx.get()))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 422 Unprocessable Entity
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
                        content=error_envelope(
                            "Unprocessable Entity",
                            code="VALIDATION_ERROR",
                            details=jsonable_encoder(exc.errors()),
                            trace_id=request_id_ctx.get()))

async def unhandled_exception_handler(request: Request, exc: Exception):
    logging.getLogger(__name__).exception("Unhandled exception")
    # 500 Internal server error
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content=error_envelope(
                            "Internal server error",
                            code="INTERNAL_ERROR",
                            trace_id=request_id_ctx.get()))

async def domain_exception_handler(request: Request, exc: domainex.DomainError):
    """
    도메인/유즈케이스 예외를 HTTP로 매핑.
    - InvalidInput(검색어 누락, 페이지 파라미터 오류) -> 400
    - BackingServiceError(업스트림 호출 실패) -> 502
    """
    if isinstance(exc, domainex.InvalidInput):
        http_status = status.HTTP_400_BAD_REQUEST
        code = "INVALID_INPUT"
    elif isinstance(exc, domainex.BackingServiceError):
        http_status = status.HTTP_502_BAD_GATEWAY
        code = "BACKING_SERVICE_ERROR"
    else:
        http_status = status.HTTP_400_BAD_REQUEST
        code = "SERVICE_ERROR"

    logging.getLogger(__name__).warning(
        "Domain error: %s (%s) path=%s", exc, code, str(request.url)
    )
    return JSONResponse(
        status_code=http_status,
        content=error_envelope(
            str(exc),
            code=code,
            trace_id=request_id_ctx.get())
    )
