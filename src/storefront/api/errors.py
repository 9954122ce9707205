"""Render storefront errors as JSON responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain import logger
from storefront.exceptions import StorefrontError


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", path=request.url.path, code=exc.code, error=exc.message)
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def register_storefront_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
