from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.core.exceptions import BusinessLogicException, DatabaseException, ExternalServiceException
import logging

logger = logging.getLogger(__name__)


async def business_logic_exception_handler(request: Request, exc: BusinessLogicException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail}
    )

async def database_exception_handler(request: Request, exc: DatabaseException):
    # cause was logged where it was raised, keep it out of the response
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail}
    )

async def external_service_exception_handler(request: Request, exc: ExternalServiceException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": getattr(exc, "message", "External service request failed."),
            "error": exc.detail,
        }
    )

async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"rejected malformed request {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request body."}
    )

async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"}
    )

def init_exception_handlers(app: FastAPI):
    app.add_exception_handler(BusinessLogicException, business_logic_exception_handler)
    app.add_exception_handler(DatabaseException, database_exception_handler)
    app.add_exception_handler(ExternalServiceException, external_service_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
