"""
Admin Decorators

Gate admin views on the server-side session. Session expiry itself is
enforced before every admin request (see ``admin.routes``).
"""

from functools import wraps
from flask import session, redirect, url_for, abort

from alphanews.auth import is_logged_in, has_permission
from alphanews.extensions import db


def login_required(f):
    """Redirect anonymous requests to the admin login page."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not is_logged_in(session):
            return redirect(url_for('admin.login'))
        return f(*args, **kwargs)
    return wrapper


def permission_required(name):
    """Require a logged-in user whose role grants ``name``.

    Anonymous -> login page; logged in without the permission -> 403.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not is_logged_in(session):
                return redirect(url_for('admin.login'))
            if not has_permission(db.session, session, name):
                abort(403)
            return f(*args, **kwargs)
        return wrapper
    return decorator
