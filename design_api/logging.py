import logging
import sys
import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Outbound provider traffic goes through httpx; its per-request INFO lines duplicate ours
_QUIET_LOGGERS = ("httpcore", "httpx", "uvicorn.access")

REQUEST_ID_HEADER = "X-Request-ID"


class _InterceptHandler(logging.Handler):
    """Forward stdlib logging records (uvicorn, httpx, our agents) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real call site
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str = "DEBUG") -> None:
    """Make loguru the single sink for application and library logs."""
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(sys.stderr, format=_LOG_FORMAT, level=log_level.upper(), colorize=True)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with a short id and log its outcome and latency.

    The id is bound into loguru's context for everything logged while the
    request is handled, and returned to the caller in the X-Request-ID header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = uuid.uuid4().hex[:8]
        method, path = request.method, request.url.path

        with logger.contextualize(request_id=rid):
            logger.info(
                "{method} {path} (content-length={length})",
                method=method,
                path=path,
                length=request.headers.get("content-length", "?"),
            )
            start = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                elapsed = (time.perf_counter() - start) * 1000
                logger.exception("{method} {path} -> UNHANDLED ({elapsed:.0f}ms)", method=method, path=path, elapsed=elapsed)
                raise
            elapsed = (time.perf_counter() - start) * 1000
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "{method} {path} -> {status} ({elapsed:.0f}ms)",
                method=method,
                path=path,
                status=response.status_code,
                elapsed=elapsed,
            )

        response.headers[REQUEST_ID_HEADER] = rid
        return response
