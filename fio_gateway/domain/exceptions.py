"""Domain-specific exceptions"""

from typing import Optional


class FioError(Exception):
    """Base exception for the Fio API client"""

    pass


class TransportError(FioError):
    """Network or connection failure before a response was received"""

    pass


class RequestTimeoutError(TransportError):
    """Transport gave up waiting for the Fio API"""

    pass


class ApiError(FioError):
    """Fio API answered with a non-2xx status code"""

    retryable = False

    def __init__(
        self,
        status_code: int,
        method: str,
        url: str,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.error_code = error_code
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.method} {self.url}: {self.status_code} {self.message or ''}".rstrip()


class BadRequestError(ApiError):
    """400 - malformed date in the request path"""

    pass


class NotFoundError(ApiError):
    """404 - unknown resource or account"""

    pass


class RateLimitError(ApiError):
    """409 - API allows one call per token every ~30 seconds"""

    retryable = True


class ServerError(ApiError):
    """500 - validation error, invalid token or opaque server failure"""

    pass


class ParseError(FioError):
    """Response body could not be decoded into a statement"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
