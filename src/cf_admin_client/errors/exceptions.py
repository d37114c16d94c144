"""Structured exceptions for Cloud Controller errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from cf_admin_client.errors.models import ErrorBody


class APIError(Exception):
    """Base exception for Cloud Controller API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        error_body: "ErrorBody | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.error_body = error_body

    @property
    def error_code(self) -> str | None:
        """Cloud Controller error code (e.g. ``CF-OrganizationNotFound``), if reported."""
        return self.error_body.error_code if self.error_body else None


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class UnprocessableEntityError(ClientError):
    """422 Unprocessable Entity."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass


class PaginationLimitError(APIError):
    """Raised when a collection spans more pages than the client allows."""

    def __init__(self, message: str, path: str, max_pages: int, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path
        self.max_pages = max_pages
