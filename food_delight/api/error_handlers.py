"""Global exception handlers.

Domain errors become ``{"error": message}`` with the error's status code,
request validation errors become 400, anything else becomes a 500 that does
not leak internal details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from food_delight.core.errors import FoodDelightError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FoodDelightError)
    async def domain_error_handler(request: Request, exc: FoodDelightError):
        logger.info('%s on %s: %s', type(exc).__name__, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning('Validation error on %s: %s', request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error('Unhandled exception on %s: %s', request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': 'Internal server error'},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        'error': 'Invalid request data',
        'details': [
            {
                'field': '.'.join(str(loc) for loc in error['loc']),
                'message': error['msg'],
            }
            for error in exc.errors()
        ],
    }
