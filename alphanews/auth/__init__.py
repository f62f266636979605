"""
Authentication and authorization core.
"""

from alphanews.auth.service import (
    login, logout, is_logged_in, is_session_expired, touch_session,
    enforce_session, get_current_user, get_user_role,
)
from alphanews.auth.permissions import has_permission

__all__ = [
    'login', 'logout', 'is_logged_in', 'is_session_expired', 'touch_session',
    'enforce_session', 'get_current_user', 'get_user_role', 'has_permission',
]
