"""Application-wide exception handlers for domain errors that endpoints don't map themselves."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from newsroom.domain.exceptions import DuplicateEntityError, PersistenceError

logger = logging.getLogger(__name__)


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    # Driver detail stays in the server log.
    logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc, exc.detail)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "The request could not be saved. Please try again."},
    )


async def duplicate_entity_handler(request: Request, exc: DuplicateEntityError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(DuplicateEntityError, duplicate_entity_handler)
