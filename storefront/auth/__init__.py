# storefront/auth/__init__.py
from .routes import auth_bp
from .decorators import admin_required

__all__ = ["auth_bp", "admin_required"]
