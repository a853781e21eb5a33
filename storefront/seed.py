# storefront/seed.py
import logging
from decimal import Decimal

from sqlalchemy import delete, select

from storefront.extensions import db
from storefront.models import Order, OrderItem, Product, User
from storefront.models.user import ROLE_ADMIN, ROLE_USER
from storefront.services.storage import UnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_USERS = (
    ("admin@example.com", "admin123", ROLE_ADMIN),
    ("user@example.com", "user123", ROLE_USER),
)

DEFAULT_PRODUCTS = (
    ("Laptop Stand", "Aluminium stand for 13-17 inch laptops", Decimal("10.00")),
    ("USB-C Cable", "1 m braided cable", Decimal("5.50")),
    ("Wireless Mouse", "2.4 GHz, silent clicks", Decimal("19.99")),
    ("Mechanical Keyboard", "Hot-swappable switches", Decimal("89.90")),
)


def _ensure_user(session, email: str, password: str, role: str) -> User:
    user = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user is None:
        user = User(email=email, role=role)
        user.set_password(password)
        session.add(user)
    return user


def _ensure_product(session, name: str, description: str, price: Decimal) -> Product:
    product = session.execute(select(Product).where(Product.name == name)).scalar_one_or_none()
    if product is None:
        product = Product(name=name, description=description, price=price)
        session.add(product)
    return product


def seed(reset: bool = False) -> dict:
    """
    Make sure the default admin, user and catalog exist.

    With reset=True every order, product and user row is deleted first.
    Must run inside an app context.
    """
    with UnitOfWork(db.session) as session:
        if reset:
            # children first, foreign keys are enforced
            for model in (OrderItem, Order, Product, User):
                session.execute(delete(model))
            logger.info("seed: existing rows removed")

        users = {role: _ensure_user(session, email, pwd, role) for email, pwd, role in DEFAULT_USERS}
        products = [_ensure_product(session, *row) for row in DEFAULT_PRODUCTS]
        session.flush()

    logger.info("seed: %d users, %d products ready", len(users), len(products))
    return {"admin": users[ROLE_ADMIN], "user": users[ROLE_USER], "products": products}
