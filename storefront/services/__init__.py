# storefront/services/__init__.py
from .order_service import (
    OrderService,
    OrderRecord,
    OrderSummary,
    OrderLineDetail,
)
from .storage import UnitOfWork

__all__ = [
    "OrderService",
    "OrderRecord",
    "OrderSummary",
    "OrderLineDetail",
    "UnitOfWork",
]
