"""
structlog setup for the JobToken API.

Every line carries the request id of the call that produced it, and the
caller's profile once the bearer token has been resolved, so a wallet
deduction or a failed receipt email can be traced back to one request.
Local development renders colored console lines; other environments emit
JSON.
"""
import logging
import sys
import time
import uuid
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

# Resend/GoTrue calls and SQL are summarized by our own events
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")


def setup_logging() -> None:
    """Route structlog and stdlib records through one stdout handler."""
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.environment == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_actor(user_id: str, role: Optional[str]) -> None:
    """Attach the authenticated profile to the rest of this request's lines."""
    structlog.contextvars.bind_contextvars(user_id=user_id, role=role)


_access_logger = get_logger("app.access")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Correlates a request across the API, the ledger writes and outbound email.

    A caller-supplied X-Request-ID is reused (the web client forwards one on
    retries); otherwise a fresh id is minted. The id is echoed on the response
    and a single request_completed line closes the request.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = await call_next(request)

        _access_logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
