import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from storefront.auth import jwt_handler
from storefront.auth.dependencies import admin_only, require_sign_in
from storefront.core.errors import InternalError, NotFound, StoreError, ValidationError
from storefront.crud import orders as order_store
from storefront.database import get_db
from storefront.models.order import ORDER_STATUSES

router = APIRouter(tags=['orders'])

logger = logging.getLogger(__name__)


class OrderStatusRequest(BaseModel):
    status: str | None = None

    @field_validator('status')
    @classmethod
    def strip_status(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


@router.get('/orders')
def get_orders(
    claims: jwt_handler.TokenClaims = Depends(require_sign_in),
    db: Session = Depends(get_db),
):
    try:
        orders = order_store.list_orders_for_buyer(db, claims.user_id)
    except StoreError as exc:
        logger.exception('Listing orders failed for user %s', claims.user_id)
        raise InternalError('Error While Getting Orders') from exc

    return [order_store.order_to_dict(order) for order in orders]


@router.get('/all-orders', dependencies=admin_only)
def get_all_orders(db: Session = Depends(get_db)):
    try:
        orders = order_store.list_all_orders(db)
    except StoreError as exc:
        logger.exception('Listing all orders failed')
        raise InternalError('Error While Getting Orders') from exc

    return [order_store.order_to_dict(order) for order in orders]


@router.put('/order-status/{order_id}', dependencies=admin_only)
def update_order_status(order_id: int, data: OrderStatusRequest, db: Session = Depends(get_db)):
    if data.status not in ORDER_STATUSES:
        raise ValidationError('Invalid order status')

    try:
        order = order_store.update_order_status(db, order_id, data.status)
    except StoreError as exc:
        logger.exception('Updating status of order %s failed', order_id)
        raise InternalError('Error While Updating Order') from exc

    if order is None:
        raise NotFound('Order not found')

    logger.info('Order %s status set to %s', order_id, data.status)
    return order_store.order_to_dict(order)
