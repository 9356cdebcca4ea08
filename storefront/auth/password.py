import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6
# bcrypt only reads the first 72 bytes of the secret
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str | None:
    """Hash a password with bcrypt.

    Returns ``None`` instead of raising; callers must not persist anything
    when this happens.
    """
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
    except Exception:
        logger.exception("Password hashing failed")
        return None


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except Exception:
        logger.warning("Password verification errored; treating as mismatch")
        return False
