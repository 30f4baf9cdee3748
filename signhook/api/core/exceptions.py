import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError

from signhook.api.utils.response_payloads import error_response

logger = logging.getLogger("signhook")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic request validation errors and return a standardized JSON response.

    Args:
        request (Request): The incoming HTTP request.
        exc (RequestValidationError): The validation error raised by FastAPI/Pydantic.

    Returns:
        JSONResponse: Standardized 422 error response.
    """
    logger.warning(f"Request validation failed on {request.url.path}: {exc.errors()}")

    return error_response(
        status_code=422,
        message="Validation failed",
        error="VALIDATION_ERROR",
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle HTTP exceptions (4xx/5xx) and return a standardized JSON response.

    Args:
        request (Request): The incoming HTTP request.
        exc (HTTPException): The HTTP exception raised by FastAPI.

    Returns:
        JSONResponse: Standardized error response with HTTP status code and message.
    """
    logger.error(f"HTTP exception: {exc.detail} ({exc.status_code})")

    return error_response(
        status_code=exc.status_code,
        error="HTTP_ERROR",
        message=str(exc.detail),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions and return a standardized JSON response.

    Args:
        request (Request): The incoming HTTP request.
        exc (Exception): The unhandled exception.

    Returns:
        JSONResponse: Standardized 500 error response.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return error_response(
        status_code=500,
        error="INTERNAL_SERVER_ERROR",
        message="Internal server error",
    )


class WebhookError(Exception):
    """
    Base class for failures surfaced to the webhook caller.

    Attributes:
        status_code: HTTP status returned to the caller
        message: Body message returned to the caller
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationFailure(WebhookError):
    """Raised when a webhook delivery cannot be proven to come from Stripe."""

    status_code = 400
    default_message = "Invalid webhook signature"


class MissingSignatureError(AuthenticationFailure):
    """Raised when the Stripe-Signature header is absent."""

    default_message = "No signature found in request"


class InvalidSignatureError(AuthenticationFailure):
    """Raised when the signature, timestamp or payload fails verification."""

    default_message = "Invalid webhook signature"


class UnhandledEventError(WebhookError):
    """Raised for event types the router has no handler for."""

    status_code = 400
    default_message = "Unhandled webhook event"


class PreconditionNotMet(WebhookError):
    """
    Raised when a handled event references data that does not exist locally.

    Stripe retries deliveries answered with a 5xx, which gives the missing
    record a chance to appear.
    """

    status_code = 500


class UserNotFoundError(PreconditionNotMet):
    """Raised when a checkout session points at an unknown user."""

    default_message = "User not found"


class SubscriptionNotFoundError(PreconditionNotMet):
    """Raised when a subscription update matches no local subscription."""

    default_message = "Subscription not found"
