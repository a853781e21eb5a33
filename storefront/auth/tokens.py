# storefront/auth/tokens.py
from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired


def _get_serializer() -> URLSafeTimedSerializer:
    secret = current_app.config.get("SECRET_KEY")
    if not secret:
        raise RuntimeError("SECRET_KEY is not set; auth tokens cannot be signed.")
    salt = current_app.config.get("AUTH_TOKEN_SALT", "storefront-auth")
    return URLSafeTimedSerializer(secret_key=secret, salt=salt)


def issue_token(user_id: int | str) -> str:
    return _get_serializer().dumps({"uid": str(user_id)})


def read_token(token: str) -> int | None:
    """Return the user id inside `token`, or None if it is forged/expired."""
    max_age = current_app.config.get("AUTH_TOKEN_MAX_AGE", 60 * 60 * 24 * 30)
    try:
        data = _get_serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        current_app.logger.info("[AUTH] expired token")
        return None
    except BadSignature:
        current_app.logger.info("[AUTH] bad token signature")
        return None
    try:
        return int(data.get("uid"))
    except (AttributeError, TypeError, ValueError):
        return None
