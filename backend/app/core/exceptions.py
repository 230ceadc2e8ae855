from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging

logger = logging.getLogger(__name__)

class LaunchZoneException(Exception):
    """Base exception for LaunchZone application"""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class NotFoundError(LaunchZoneException):
    """Raised when a resource is missing or belongs to another user"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class JobNotFoundError(NotFoundError):
    """Raised when a job is not found"""
    def __init__(self, message: str = "Job not found"):
        super().__init__(message)

class AssetNotFoundError(NotFoundError):
    """Raised when an asset is not found"""
    def __init__(self, message: str = "Asset not found"):
        super().__init__(message)

class ValidationError(LaunchZoneException):
    """Raised when validation fails"""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class GenerationError(LaunchZoneException):
    """Raised when a synchronous generation produced nothing usable"""
    def __init__(self, message: str = "Generation failed"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

class QueueUnavailableError(LaunchZoneException):
    """Raised when a background job could not be handed to the worker queue"""
    def __init__(self, message: str = "Background worker is unavailable"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)

async def launchzone_exception_handler(request: Request, exc: LaunchZoneException):
    """Handle custom LaunchZone exceptions"""
    if exc.status_code >= 500:
        logger.error(f"LaunchZone exception on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.status_code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message}
    )

async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle SQLAlchemy database exceptions"""
    logger.error(f"Database error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Database error occurred"}
    )

async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unexpected error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"}
    )
