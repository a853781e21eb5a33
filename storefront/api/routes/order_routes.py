# storefront/api/routes/order_routes.py
from flask import Blueprint, request, jsonify
from flask_login import current_user, login_required

from storefront.extensions import db
from storefront.errors import ForbiddenError, NotFoundError
from storefront.auth.decorators import admin_required
from storefront.services.order_service import OrderService

order_bp = Blueprint("order_bp", __name__, url_prefix="/api/orders")


def _service() -> OrderService:
    return OrderService(db.session)


@order_bp.post("")
@login_required
def create_order():
    data = request.get_json(silent=True) or {}
    order = _service().create_order(current_user.id, data.get("items"))
    return jsonify({"ok": True, "order": order.to_dict()}), 201


@order_bp.get("/mine")
@login_required
def my_orders():
    orders = _service().find_orders_by_user_id(current_user.id)
    return jsonify([o.to_dict() for o in orders]), 200


@order_bp.get("")
@admin_required
def all_orders():
    orders = _service().find_all_orders()
    return jsonify([o.to_dict() for o in orders]), 200


@order_bp.get("/<int:order_id>")
@login_required
def get_order(order_id: int):
    service = _service()
    owner_id = service.owner_of(order_id)
    if owner_id is None:
        raise NotFoundError(f"Order with id {order_id} not found")
    if owner_id != current_user.id and not current_user.is_admin:
        raise ForbiddenError("Not allowed to view this order")

    lines = service.find_order_by_id(order_id)
    if not lines:
        raise NotFoundError(f"Order with id {order_id} not found")
    return jsonify([line.to_dict() for line in lines]), 200
