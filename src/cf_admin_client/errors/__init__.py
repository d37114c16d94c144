"""Error handling for Cloud Controller responses."""

from cf_admin_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PaginationLimitError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from cf_admin_client.errors.handler import raise_for_status
from cf_admin_client.errors.models import ErrorBody

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ErrorBody",
    "ForbiddenError",
    "NotFoundError",
    "PaginationLimitError",
    "RateLimitError",
    "ServerError",
    "UnauthorizedError",
    "UnprocessableEntityError",
    "raise_for_status",
]
