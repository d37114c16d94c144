"""Cloud Controller error body model."""

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class ErrorBody:
    """Error payload returned alongside a non-2xx Cloud Controller response.

    The v2 API answers with ``{"description", "error_code", "code"}``; proxies
    and the admin console's own fakes answer with a bare ``{"error": ...}``.
    Both shapes are accepted.
    """

    error: str | None = None  # Free-form error message
    description: str | None = None  # Cloud Controller human-readable description
    error_code: str | None = None  # e.g. "CF-NotAuthorized"
    code: int | None = None  # Cloud Controller numeric error code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorBody | None":
        """Parse an error body from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            ErrorBody, or None if the body is not JSON or carries no error message
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            # Not JSON (e.g. a plain-text gateway error page)
            return None

        if not isinstance(data, dict):
            return None

        error = _as_text(data.get("error"))
        description = _as_text(data.get("description"))
        if error is None and description is None:
            return None

        code = data.get("code")
        return cls(
            error=error,
            description=description,
            error_code=_as_text(data.get("error_code")),
            code=code if isinstance(code, int) else None,
        )

    def to_exception_message(self) -> str:
        """Convert the error body to an exception message."""
        message = self.error or self.description or "Unknown API error"
        if self.error_code:
            return f"{message} ({self.error_code})"
        return message


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
