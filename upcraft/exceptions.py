"""Errors raised by the REST client. Views catch ``ApiError`` and show a toast."""
from typing import Optional


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, path: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.path = path

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class ValidationError(ApiError):
    """400: the server rejected the payload."""


class NotFoundError(ApiError):
    """404: entity does not exist."""


class RateLimitedError(ApiError):
    """429: the AI backend is over quota."""


class ApiUnavailableError(ApiError):
    """No HTTP response at all (connection refused, timeout)."""


class ResponseFormatError(ApiError):
    """2xx response whose body is not JSON or does not fit the expected shape."""


_BY_STATUS = {
    400: ValidationError,
    404: NotFoundError,
    429: RateLimitedError,
}


def error_for_status(status_code: int, message: str, path: str = "") -> ApiError:
    cls = _BY_STATUS.get(status_code, ApiError)
    return cls(message, status_code=status_code, path=path)
