"""Error taxonomy shared by the gates, the store and the route handlers.

Handlers raise these; ``storefront.main`` registers a single exception handler
that turns any ``StorefrontError`` into ``{"success": false, "message": ...}``
with the matching status code.
"""

from fastapi import status


class StorefrontError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(StorefrontError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(StorefrontError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreError(Exception):
    """Raised by the crud layer when the database cannot serve a request."""


class TokenError(Exception):
    """Base class for session token verification failures."""


class InvalidToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


class MalformedToken(TokenError):
    pass
