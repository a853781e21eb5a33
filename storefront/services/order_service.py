# storefront/services/order_service.py
"""
Order placement and order queries.

`create_order` is the only writer: it validates the requested items, prices
them from the catalog and inserts the order header plus one row per item in
a single UnitOfWork. Either every row lands or none do.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from decimal import Decimal
from collections.abc import Mapping
from typing import Any, Iterable

from sqlalchemy import select

from storefront.errors import NotFoundError, ValidationError
from storefront.models import Order, OrderItem, OrderStatus, Product, User
from storefront.services.storage import UnitOfWork

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# 32-bit INTEGER columns and NUMERIC(10,2) money
MAX_INT = 2**31 - 1
MAX_TOTAL = Decimal("99999999.99")


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class _Record:
    def to_dict(self) -> dict:
        return {k: _json_value(v) for k, v in asdict(self).items()}

    @classmethod
    def from_row(cls, row):
        return cls(**dict(row._mapping))


@dataclass(frozen=True)
class OrderRecord(_Record):
    id: int
    user_id: int
    total_price: Decimal
    status: str
    created_at: datetime


@dataclass(frozen=True)
class OrderSummary(_Record):
    id: int
    user_id: int
    total_price: Decimal
    status: str
    created_at: datetime
    email: str


@dataclass(frozen=True)
class OrderLineDetail(_Record):
    id: int
    status: str
    created_at: datetime
    email: str
    product_id: int
    product_name: str
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class LineRequest:
    product_id: int
    quantity: int


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_INT


def parse_items(items: Iterable[Mapping[str, Any]] | None) -> list[LineRequest]:
    """Normalise `[{productId, quantity}, ...]`, rejecting anything unusable."""
    if not isinstance(items, (list, tuple)) or not items:
        raise ValidationError("Order must contain at least one item")

    lines = []
    for idx, it in enumerate(items):
        if not isinstance(it, Mapping):
            raise ValidationError(f"Item #{idx} must be an object")
        pid = it.get("productId", it.get("product_id"))
        qty = it.get("quantity")
        if not _is_positive_int(pid):
            raise ValidationError(f"Item #{idx} has an invalid productId")
        if not _is_positive_int(qty):
            raise ValidationError(f"Item #{idx} must have a positive integer quantity")
        lines.append(LineRequest(product_id=pid, quantity=qty))
    return lines


class OrderService:
    def __init__(self, session):
        self.session = session

    # ------------------------------------------------------------------ write
    def create_order(self, user_id: int, items) -> OrderRecord:
        lines = parse_items(items)

        with UnitOfWork(self.session) as session:
            wanted = sorted({line.product_id for line in lines})
            prices = dict(
                session.execute(
                    select(Product.id, Product.price).where(Product.id.in_(wanted))
                ).all()
            )

            total = Decimal("0.00")
            for line in lines:
                if line.product_id not in prices:
                    logger.info(
                        "order rejected for user %s: product %s missing",
                        user_id, line.product_id,
                    )
                    raise NotFoundError(f"Product with id {line.product_id} not found")
                total += Decimal(prices[line.product_id]) * line.quantity

            if total > MAX_TOTAL:
                raise ValidationError(f"Order total {total} exceeds the maximum of {MAX_TOTAL}")

            order = Order(
                user_id=user_id,
                total_price=total.quantize(CENT),
                status=OrderStatus.PENDING.value,
            )
            session.add(order)
            session.flush()

            for line in lines:
                session.add(OrderItem(
                    order_id=order.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=Decimal(prices[line.product_id]).quantize(CENT),
                ))
            session.flush()

            record = OrderRecord(
                id=order.id,
                user_id=order.user_id,
                total_price=Decimal(order.total_price).quantize(CENT),
                status=order.status,
                created_at=order.created_at,
            )

        logger.info(
            "order #%s created for user %s: %d item(s), total %s",
            record.id, user_id, len(lines), record.total_price,
        )
        return record

    # ------------------------------------------------------------------- read
    def find_orders_by_user_id(self, user_id: int) -> list[OrderRecord]:
        stmt = (
            select(Order.id, Order.user_id, Order.total_price, Order.status, Order.created_at)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return [OrderRecord.from_row(r) for r in self.session.execute(stmt)]

    def find_all_orders(self) -> list[OrderSummary]:
        stmt = (
            select(
                Order.id,
                Order.user_id,
                Order.total_price,
                Order.status,
                Order.created_at,
                User.email,
            )
            .join(User, User.id == Order.user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return [OrderSummary.from_row(r) for r in self.session.execute(stmt)]

    def find_order_by_id(self, order_id: int) -> list[OrderLineDetail]:
        stmt = (
            select(
                Order.id,
                Order.status,
                Order.created_at,
                User.email,
                OrderItem.product_id,
                Product.name.label("product_name"),
                OrderItem.quantity,
                OrderItem.price,
            )
            .select_from(Order)
            .join(User, User.id == Order.user_id)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(Order.id == order_id)
            .order_by(OrderItem.id)
        )
        return [OrderLineDetail.from_row(r) for r in self.session.execute(stmt)]

    def owner_of(self, order_id: int) -> int | None:
        return self.session.execute(
            select(Order.user_id).where(Order.id == order_id)
        ).scalar_one_or_none()
