"""
Custom exception classes and error handlers
Provides consistent error responses across the service
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

class WishlistServiceException(HTTPException):
    """Base exception class for the wishlist service"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class BadRequestException(WishlistServiceException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class UnauthorizedException(WishlistServiceException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code
        )

class NotFoundException(WishlistServiceException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(WishlistServiceException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )

class InternalServerException(WishlistServiceException):
    """500 Internal Server Error"""

    def __init__(
        self,
        detail: str = "Internal server error",
        error_code: str = "INTERNAL_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )

class InvalidResponseException(WishlistServiceException):
    """502 Bad Gateway - upstream answered with something we cannot use"""

    def __init__(
        self,
        detail: str = "Invalid response from upstream service",
        error_code: str = "INVALID_UPSTREAM_RESPONSE"
    ):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code=error_code
        )

class ServiceUnavailableException(WishlistServiceException):
    """503 Service Unavailable"""

    def __init__(
        self,
        detail: str = "Service temporarily unavailable",
        error_code: str = "SERVICE_UNAVAILABLE"
    ):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class InvalidInputException(BadRequestException):
    """Missing or malformed request field"""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="INVALID_INPUT")

class BusinessRuleViolationException(BadRequestException):
    """Request is well-formed but breaks a configured business limit"""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="BUSINESS_RULE_VIOLATION")

class WishlistNotFoundException(NotFoundException):
    """User has no wishlist yet"""

    def __init__(self, detail: str = "Wishlist not found"):
        super().__init__(detail=detail, error_code="WISHLIST_NOT_FOUND")

class ItemNotFoundException(NotFoundException):
    """Product is not in the user's wishlist"""

    def __init__(self, detail: str = "Item not found in wishlist"):
        super().__init__(detail=detail, error_code="ITEM_NOT_FOUND")

class ProductNotFoundException(NotFoundException):
    """Product service does not know the product"""

    def __init__(self, detail: str = "Product not found"):
        super().__init__(detail=detail, error_code="PRODUCT_NOT_FOUND")

class ItemAlreadyExistsException(ConflictException):
    """Product already saved in the wishlist"""

    def __init__(self, detail: str = "Item already exists in wishlist"):
        super().__init__(detail=detail, error_code="ITEM_ALREADY_EXISTS")

class CartMigrationIncompleteException(InternalServerException):
    """
    Cart accepted the item but the wishlist removal failed.
    The item now lives in both the cart and the wishlist and needs manual reconciliation.
    """

    def __init__(self, user_id: str, product_id: str, reason: str):
        super().__init__(
            detail=(
                f"Item {product_id} was added to the cart but could not be removed "
                f"from the wishlist of user {user_id}: {reason}"
            ),
            error_code="CART_MIGRATION_INCOMPLETE"
        )
        self.user_id = user_id
        self.product_id = product_id

def error_response(
    request: Request,
    status_code: int,
    code: Optional[str],
    message: Any,
    headers: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Render the common error envelope"""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": getattr(request.state, "request_id", None)
            }
        },
        headers=headers
    )

async def service_exception_handler(request: Request, exc: WishlistServiceException) -> JSONResponse:
    return error_response(request, exc.status_code, exc.error_code, exc.detail, exc.headers)

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(
        request, exc.status_code, "HTTP_ERROR", exc.detail, getattr(exc, "headers", None)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", errors)

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception: {str(exc)}")

    # Don't expose internal errors in production
    if settings.DEBUG:
        detail = str(exc)
    else:
        detail = "An unexpected error occurred"

    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", detail)

def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application"""
    app.add_exception_handler(WishlistServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
