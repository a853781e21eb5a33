# storefront/auth/routes.py
from flask import Blueprint, request, jsonify, current_app
from flask_login import current_user, login_required
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from storefront.extensions import db
from storefront.errors import AuthError, StorageError, ValidationError
from storefront.models.user import User, ROLE_USER
from storefront.auth.tokens import issue_token
from storefront.services.storage import UnitOfWork

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

MIN_PASSWORD_LENGTH = 6


def _email_taken(email: str) -> bool:
    return db.session.execute(select(User.id).where(User.email == email)).first() is not None


def _credentials() -> tuple[str, str]:
    data = request.get_json(silent=True) or {}
    email = str(data.get("email") or "").strip().lower()
    password = str(data.get("password") or "")
    return email, password


@auth_bp.post("/register")
def register():
    email, password = _credentials()

    if not email or "@" not in email:
        raise ValidationError("A valid email is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if _email_taken(email):
        raise ValidationError("User already exists")

    user = User(email=email, role=ROLE_USER)
    user.set_password(password)
    try:
        with UnitOfWork(db.session) as session:
            session.add(user)
    except StorageError as e:
        # a concurrent registration won the UNIQUE(email) race
        if isinstance(e.__cause__, IntegrityError):
            raise ValidationError("User already exists") from e
        raise

    current_app.logger.info("[AUTH] registered uid=%s email=%r", user.id, email)
    payload = user.to_dict()
    payload["token"] = issue_token(user.id)
    return jsonify(payload), 201


@auth_bp.post("/login")
def login():
    email, password = _credentials()

    user = db.session.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if not user or not user.check_password(password):
        current_app.logger.info("[AUTH] login failed for %r", email)
        raise AuthError("Invalid email or password")

    payload = user.to_dict()
    payload["token"] = issue_token(user.id)
    return jsonify(payload), 200


@auth_bp.get("/me")
@login_required
def me():
    return jsonify(current_user.to_dict()), 200
