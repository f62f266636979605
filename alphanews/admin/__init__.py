"""
Admin Blueprint

Back office for editors. Authentication is session-based: the server-side
session carries user_id, username, role_id and last_activity.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from alphanews.admin import routes  # noqa: E402, F401
