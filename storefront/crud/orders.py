from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import StoreError
from storefront.models.order import Order


def order_to_dict(order: Order) -> dict[str, Any]:
    return {
        "_id": order.id,
        "buyer": order.buyer_id,
        "products": order.products or [],
        "payment": order.payment or {},
        "status": order.status,
        "createdAt": order.created_at.isoformat() if order.created_at else None,
    }


def list_orders_for_buyer(db: Session, buyer_id: int) -> list[Order]:
    try:
        return db.query(Order).filter(Order.buyer_id == int(buyer_id)).order_by(Order.id.asc()).all()
    except SQLAlchemyError as exc:
        raise StoreError("list_orders_for_buyer failed") from exc


def list_all_orders(db: Session) -> list[Order]:
    try:
        return db.query(Order).order_by(Order.id.desc()).all()
    except SQLAlchemyError as exc:
        raise StoreError("list_all_orders failed") from exc


def update_order_status(db: Session, order_id: int, status: str) -> Optional[Order]:
    try:
        order = db.query(Order).filter(Order.id == int(order_id)).first()
        if order is None:
            return None
        order.status = status
        db.commit()
        db.refresh(order)
        return order
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("update_order_status failed") from exc
