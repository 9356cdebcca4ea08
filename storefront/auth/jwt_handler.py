from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from storefront.core.errors import ExpiredToken, InvalidToken, MalformedToken

DEFAULT_ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    """Decoded session token claims."""

    user_id: int
    role: int = 0
    iat: int
    exp: int


def create_access_token(
    user_id: int,
    role: int,
    *,
    secret: str,
    expires_delta: timedelta,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": int(role),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, *, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> TokenClaims:
    """Verify ``token`` and return its claims.

    Raises:
        ExpiredToken: ``exp`` is in the past.
        InvalidToken: signature mismatch, or claims rejected for another reason.
        MalformedToken: not a decodable JWT, or required claims are missing.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredToken(str(exc)) from exc
    # InvalidSignatureError subclasses DecodeError, so it must come first.
    except jwt.InvalidSignatureError as exc:
        raise InvalidToken(str(exc)) from exc
    except (jwt.DecodeError, jwt.MissingRequiredClaimError) as exc:
        raise MalformedToken(str(exc)) from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(str(exc)) from exc

    try:
        return TokenClaims(
            user_id=payload["sub"],
            role=payload.get("role", 0),
            iat=payload["iat"],
            exp=payload["exp"],
        )
    except ValidationError as exc:
        raise MalformedToken("token claims have the wrong shape") from exc
