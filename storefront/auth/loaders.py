# storefront/auth/loaders.py
from flask import jsonify

from storefront.extensions import db, login_manager
from storefront.auth.tokens import read_token


@login_manager.user_loader
def load_user(user_id):
    # Lazy import to avoid circular dependency when loading the model
    from storefront.models.user import User
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.request_loader
def load_user_from_request(request):
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    uid = read_token(token.strip())
    if uid is None:
        return None
    return load_user(uid)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"ok": False, "error": "Authentication required"}), 401
