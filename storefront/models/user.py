"""User model definitions."""

from sqlalchemy import Column, Date, DateTime, Integer, String, func

from storefront.database import Base

USER_ROLE = 0
ADMIN_ROLE = 1


class User(Base):
    """Represents a storefront account."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    dob = Column(Date)
    answer = Column(String, nullable=False)  # security answer, compared as-is
    role = Column(Integer, nullable=False, default=USER_ROLE)  # 0 user / 1 admin
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
