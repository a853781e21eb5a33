# storefront/auth/decorators.py
from functools import wraps

from flask_login import current_user, login_required

from storefront.errors import ForbiddenError


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not current_user.is_admin:
            raise ForbiddenError("Admin access required")
        return view(*args, **kwargs)

    return wrapper
