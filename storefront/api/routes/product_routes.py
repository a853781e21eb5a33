# storefront/api/routes/product_routes.py
from decimal import Decimal, InvalidOperation

from flask import Blueprint, jsonify, request, current_app
from sqlalchemy import select

from storefront.extensions import db
from storefront.errors import NotFoundError, ValidationError
from storefront.models import Product
from storefront.auth.decorators import admin_required
from storefront.services.storage import UnitOfWork

api_products = Blueprint("api_products", __name__, url_prefix="/api/products")

# products.price is NUMERIC(10,2)
MAX_PRICE = Decimal("99999999.99")


def _to_price(val) -> Decimal:
    try:
        price = Decimal(str(val)).quantize(Decimal("0.01"))
    except (InvalidOperation, ValueError):
        raise ValidationError("Invalid price")
    if price <= 0:
        raise ValidationError("Price must be > 0")
    if price > MAX_PRICE:
        raise ValidationError(f"Price must not exceed {MAX_PRICE}")
    return price


@api_products.get("")
def list_products():
    products = db.session.execute(select(Product).order_by(Product.id)).scalars().all()
    return jsonify([p.to_dict() for p in products]), 200


@api_products.get("/<int:product_id>")
def get_product(product_id: int):
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError(f"Product with id {product_id} not found")
    return jsonify(product.to_dict()), 200


@api_products.post("")
@admin_required
def create_product():
    data = request.get_json(silent=True) or {}
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValidationError("Product name is required")
    description = data.get("description")

    product = Product(
        name=name,
        description=str(description).strip() if description else None,
        price=_to_price(data.get("price")),
    )
    with UnitOfWork(db.session) as session:
        session.add(product)

    current_app.logger.info("[PRODUCTS] created #%s %r", product.id, product.name)
    return jsonify(product.to_dict()), 201
