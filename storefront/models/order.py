"""Order model definitions."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func

from storefront.database import Base

ORDER_STATUSES = ("Not Process", "Processing", "Shipped", "Delivered", "Cancelled")


class Order(Base):
    """Represents a placed order."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    products = Column(JSON, nullable=False, default=list)
    payment = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default=ORDER_STATUSES[0])
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
