"""
Domain errors and their HTTP mapping.
Failures are rendered as RFC 7807 problem documents (application/problem+json).
"""

import logging

from elasticsearch import ApiError, TransportError
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"
PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.6.1"


class SearchEngineError(Exception):
    """An Elasticsearch call failed; detail carries the engine diagnostic."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BulkIndexError(SearchEngineError):
    """Some documents of a bulk request were rejected."""

    def __init__(self, failures: list[tuple[str, object]]):
        super().__init__("Some items failed to index")
        self.failures = failures


def engine_diagnostic(exc: Exception, verbose: bool = False) -> str:
    """Human-readable description of a client exception; raw body included when verbose."""
    detail = str(exc)
    # Transport errors without a cause print only a fixed text such as "Connection error"
    if isinstance(exc, TransportError) and str(exc.message) not in detail:
        detail = f"{detail}: {exc.message}"
    if verbose and isinstance(exc, ApiError) and exc.body:
        detail = f"{detail}\n{exc.body}"
    return detail


def problem(detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    """Problem response as returned by every failing route."""
    return JSONResponse(
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        content={
            "type": PROBLEM_TYPE,
            "title": "An error occurred while processing your request.",
            "status": status_code,
            "detail": detail,
        },
    )


async def search_engine_error_handler(request: Request, exc: SearchEngineError) -> JSONResponse:
    logger.warning("Elasticsearch error on %s %s: %s", request.method, request.url.path, exc.detail)
    return problem(exc.detail)


def register_exception_handlers(app: FastAPI) -> None:
    # Client errors are wrapped into SearchEngineError by ProductService
    app.add_exception_handler(SearchEngineError, search_engine_error_handler)
