# storefront/models/__init__.py
from .user import User
from .product import Product
from .order import Order, OrderStatus
from .order_item import OrderItem

__all__ = [
    "User",
    "Product",
    "Order",
    "OrderStatus",
    "OrderItem",
]
