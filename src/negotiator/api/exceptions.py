"""Exception handlers mapping domain errors to plain-text responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from negotiator.core.service.models import CarrierNotFound, InvalidRequest

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on ``app``.

    Errors without a handler here (store, retrieval, model failures)
    fall through to the default 500 response.
    """

    @app.exception_handler(InvalidRequest)
    async def handle_invalid_request(
        request: Request, exc: InvalidRequest
    ) -> PlainTextResponse:
        return PlainTextResponse(InvalidRequest.detail, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        logger.info(
            "Rejected malformed request to %s: %s",
            request.url.path,
            exc.errors(),
        )
        return PlainTextResponse(InvalidRequest.detail, status_code=400)

    @app.exception_handler(CarrierNotFound)
    async def handle_carrier_not_found(
        request: Request, exc: CarrierNotFound
    ) -> PlainTextResponse:
        return PlainTextResponse(CarrierNotFound.detail, status_code=404)
