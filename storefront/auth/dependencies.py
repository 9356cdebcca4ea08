"""Request gates for protected routes.

``require_sign_in`` verifies the session token and leaves its claims on
``request.state.user``. ``is_admin`` runs after it and re-reads the user row
on every call, so a demoted admin loses access even while their token is
still valid.
"""

import logging
import re

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.auth import jwt_handler
from storefront.core.config import Settings
from storefront.core.errors import Forbidden, InternalError, StoreError, TokenError, Unauthorized
from storefront.crud import users as user_store
from storefront.database import get_db
from storefront.models.user import ADMIN_ROLE, User

logger = logging.getLogger(__name__)

_BEARER_PREFIX = re.compile(r"^Bearer\s+")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def extract_token(authorization: str) -> str:
    return _BEARER_PREFIX.sub("", authorization.strip(), count=1)


def require_sign_in(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> jwt_handler.TokenClaims:
    authorization = request.headers.get("Authorization")
    if not authorization:
        logger.info("Rejected %s %s: no token", request.method, request.url.path)
        raise Unauthorized("Unauthorized: No token provided")

    try:
        claims = jwt_handler.decode_access_token(
            extract_token(authorization),
            secret=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except TokenError as exc:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, type(exc).__name__)
        raise Unauthorized("Unauthorized: Invalid token") from exc

    request.state.user = claims
    return claims


def is_admin(request: Request, db: Session = Depends(get_db)) -> User:
    claims = getattr(request.state, "user", None)
    if claims is None or not getattr(claims, "user_id", None):
        raise Unauthorized("Unauthorized: User not found")

    try:
        user = user_store.find_user_by_id(db, claims.user_id)
    except StoreError as exc:
        logger.exception("Admin check failed for user %s", claims.user_id)
        raise InternalError("Error in admin middleware") from exc

    if user is None or user.role != ADMIN_ROLE:
        logger.warning("Admin access denied for user %s", claims.user_id)
        raise Forbidden("UnAuthorized Access")
    return user


signed_in = [Depends(require_sign_in)]
admin_only = [Depends(require_sign_in), Depends(is_admin)]
