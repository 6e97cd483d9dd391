from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from design_api.config import settings
from design_api.errors import UNEXPECTED_ERROR_MESSAGE, AnalysisError
from design_api.logging import RequestLoggingMiddleware, setup_logging
from design_api.routers.analyze import router as analyze_router

setup_logging(settings.log_level)

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Design Token Extractor")


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Refuse request bodies whose declared length exceeds settings.max_request_bytes.

    Bodies sent without Content-Length still hit the decoded-size check in
    design_api.images.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        declared = request.headers.get("content-length")
        if declared is None:
            return await call_next(request)

        try:
            length = int(declared)
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Invalid Content-Length header."})

        if length > settings.max_request_bytes:
            logger.warning(
                "Rejected {length} byte body (limit {limit})",
                length=length,
                limit=settings.max_request_bytes,
            )
            return JSONResponse(status_code=413, content={"error": "Image must be less than 50MB"})
        return await call_next(request)


app.add_middleware(
    CORSMiddleware,  # ty: ignore[invalid-argument-type]  # Starlette ParamSpec typing limitation
    allow_origins=["*"],
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(BodySizeLimitMiddleware)  # ty: ignore[invalid-argument-type]  # same Starlette issue
app.add_middleware(RequestLoggingMiddleware)  # ty: ignore[invalid-argument-type]  # same Starlette issue

app.include_router(analyze_router)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.info("{kind}: {message}", kind=type(exc).__name__, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed request body: {errors}", errors=exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body. Expected JSON with an imageBase64 field."})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unexpected error in {path}", path=request.url.path)
    return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR_MESSAGE})


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "provider_configured": bool(settings.perplexity_api_key)}


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")
