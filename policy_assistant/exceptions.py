"""Custom exception hierarchy for consistent API error responses."""

from typing import Any, Optional


class BaseAPIException(Exception):
    """Base exception rendered by the global exception handler."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details


# ============================================================================
# Authentication
# ============================================================================


class MissingTokenError(BaseAPIException):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, error_code="MISSING_TOKEN", status_code=401)


class InvalidTokenError(BaseAPIException):
    """Raised when a Clerk session token fails verification."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message=message, error_code="INVALID_TOKEN", status_code=401)


# ============================================================================
# LLM
# ============================================================================


class InvalidModelError(BaseAPIException):
    """Raised when a requested model is not in the allowed list."""

    def __init__(self, model: str, provider: str, valid_models: list[str]):
        super().__init__(
            message=f"Model '{model}' is not allowed for provider '{provider}'",
            error_code="INVALID_MODEL",
            status_code=400,
            details={"model": model, "provider": provider, "valid_models": valid_models},
        )


class LLMTimeoutError(BaseAPIException):
    """Raised when an LLM call exceeds its timeout."""

    def __init__(self, provider: str, timeout_seconds: float):
        super().__init__(
            message=f"LLM provider '{provider}' timed out after {timeout_seconds}s",
            error_code="LLM_TIMEOUT",
            status_code=504,
            details={"provider": provider, "timeout_seconds": timeout_seconds},
        )
        self.provider = provider
        self.timeout_seconds = timeout_seconds
