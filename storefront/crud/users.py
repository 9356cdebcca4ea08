from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import StoreError
from storefront.models.user import USER_ROLE, User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "email", "password_hash", "phone", "address", "dob", "answer", "role"})


def public_user(user: User) -> dict[str, Any]:
    """Client-facing view of a user row; never carries the hash or the answer."""
    return {
        "_id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "address": user.address,
        "DOB": user.dob.isoformat() if user.dob else None,
        "role": user.role,
    }


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    try:
        return db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as exc:
        raise StoreError("find_user_by_email failed") from exc


def find_user_by_id(db: Session, user_id: int) -> Optional[User]:
    try:
        return db.query(User).filter(User.id == int(user_id)).first()
    except SQLAlchemyError as exc:
        raise StoreError("find_user_by_id failed") from exc


def find_user_by_email_and_answer(db: Session, email: str, answer: str) -> Optional[User]:
    # One query on both columns, so a miss never tells which one was wrong.
    try:
        return db.query(User).filter(User.email == email, User.answer == answer).first()
    except SQLAlchemyError as exc:
        raise StoreError("find_user_by_email_and_answer failed") from exc


def create_user(
    db: Session,
    *,
    name: str,
    email: str,
    password_hash: str,
    phone: str,
    address: str,
    answer: str,
    dob: date | None = None,
    role: int = USER_ROLE,
) -> User:
    user = User(
        name=name,
        email=email,
        password_hash=password_hash,
        phone=phone,
        address=address,
        dob=dob,
        answer=answer,
        role=role,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("create_user failed") from exc
    return user


def update_user_by_id(db: Session, user_id: int, **fields: Any) -> Optional[User]:
    """Apply a partial update; ``None`` values mean "leave unchanged".

    Returns the refreshed row, or ``None`` when no user has ``user_id``.
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"unknown user fields: {sorted(unknown)}")

    try:
        user = db.query(User).filter(User.id == int(user_id)).first()
        if user is None:
            return None

        changes = {key: value for key, value in fields.items() if value is not None}
        for key, value in changes.items():
            setattr(user, key, value)

        if changes:
            db.commit()
            db.refresh(user)
            logger.debug("Updated user %s fields=%s", user.id, sorted(changes))
        return user
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("update_user_by_id failed") from exc
