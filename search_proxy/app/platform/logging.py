# search_proxy/app/platform/logging.py
import os
import json
import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone

# ===== Request ID =====
request_id_ctx = ContextVar("request_id", default="-")

class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True

# ===== JSON Formatter =====
class JsonFormatter(logging.Formatter):
    """
    JSON 라인 출력.
    uvicorn.access 레코드 및 검색 로그에서 extra로 넘긴 필드도 포함.
    """
    EXTRA_FIELDS = (
        "client_addr", "request_line", "status_code",
        "http_method", "path", "query_string",
        "duration_ms", "search_query", "page", "limit",
    )

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
                .isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        # 예외 스택
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k in self.EXTRA_FIELDS:
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False)

# ===== Text Formatter (로컬 확인용) =====
TEXT_DEFAULT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"
TEXT_ACCESS = "%(asctime)s %(levelname)s [access] [%(request_id)s] %(message)s"

def setup_logging(
    *,
    log_to_file: bool = False,
    log_dir: str = "logs",
    as_json: bool = True,
    level: str = "INFO",
) -> None:
    """
    - app 로그: root, uvicorn.error
    - access 로그: uvicorn.access (RequestContextMiddleware 가 기록)
    - 중복 방지: uvicorn.* 는 propagate=False
    """
    formatters = {
        "json": {"()": JsonFormatter},
        "text_default": {"format": TEXT_DEFAULT},
        "text_access": {"format": TEXT_ACCESS},
    }

    handlers = {
        "console_app": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if as_json else "text_default",
            "filters": ["request_id"],
        },
        "console_access": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if as_json else "text_access",
            "filters": ["request_id"],
        },
    }

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file_app"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": level,
            "formatter": "json" if as_json else "text_default",
            "filename": os.path.join(log_dir, "app.log"),
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
            "filters": ["request_id"],
        }
        handlers["file_access"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": level,
            "formatter": "json" if as_json else "text_access",
            "filename": os.path.join(log_dir, "access.log"),
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
            "filters": ["request_id"],
        }

    app_handlers = ["console_app"] + (["file_app"] if log_to_file else [])
    access_handlers = ["console_access"] + (["file_access"] if log_to_file else [])

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIDFilter}
        },
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": app_handlers,
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": app_handlers,
                "level": level,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": access_handlers,
                "level": level,
                "propagate": False,
            },
        },
    })
