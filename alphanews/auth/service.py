"""
Auth Service

Credential checks and the session lifecycle. ``conn`` is a SQLAlchemy
session and ``state`` the per-client session mapping (``flask.session`` in
requests, a plain dict in tests); nothing here reads request globals.
"""

import logging
import time

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from alphanews.models import User, Role, utc_now
from alphanews.models.user import USER_STATUS_ACTIVE
from alphanews.services.activity import log_activity

logger = logging.getLogger(__name__)

MSG_USER_NOT_FOUND = 'User not found'
MSG_INVALID_PASSWORD = 'Invalid password'
MSG_NOT_ACTIVE = 'Your account is not active. Please contact an administrator.'
MSG_DATABASE_ERROR = 'Database error'
MSG_LOGIN_OK = 'Login successful'
MSG_LOGOUT_OK = 'Logged out successfully'


def _result(success, message):
    return {'success': success, 'message': message}


def login(conn, state, identifier, password, client=None, now=None):
    """Verify credentials (username OR email) and open a session.

    Returns ``{'success': bool, 'message': str}``; never raises.
    """
    try:
        user = conn.query(User).filter(
            or_(User.username == identifier, User.email == identifier)
        ).first()

        if user is None:
            return _result(False, MSG_USER_NOT_FOUND)
        if not user.check_password(password):
            return _result(False, MSG_INVALID_PASSWORD)
        if user.status != USER_STATUS_ACTIVE:
            return _result(False, MSG_NOT_ACTIVE)

        user_id, username, role_id = user.id, user.username, user.role_id
        user.last_login = utc_now()
        conn.commit()
    except SQLAlchemyError:
        conn.rollback()
        logger.exception("Database error during login for %r", identifier)
        return _result(False, MSG_DATABASE_ERROR)

    state.clear()
    state['user_id'] = user_id
    state['username'] = username
    state['role_id'] = role_id
    state['last_activity'] = int(now if now is not None else time.time())

    # Not atomic with the last_login update above.
    log_activity(conn, user_id, 'login', 'users', user_id, 'User logged in', client=client)
    logger.info("User %s logged in", username)
    return _result(True, MSG_LOGIN_OK)


def logout(conn, state, client=None):
    """Log the outgoing user (if any) and destroy all session state."""
    user_id = state.get('user_id')
    if user_id is not None:
        log_activity(conn, user_id, 'logout', 'users', user_id, 'User logged out', client=client)
        logger.info("User %s logged out", state.get('username'))

    state.clear()
    return _result(True, MSG_LOGOUT_OK)


def is_logged_in(state):
    return state.get('user_id') is not None


def is_session_expired(state, lifetime, now=None):
    """True iff a last-activity stamp exists and is older than ``lifetime`` seconds."""
    last_activity = state.get('last_activity')
    if last_activity is None:
        return False
    now = now if now is not None else time.time()
    return now - last_activity > lifetime


def touch_session(state, now=None):
    state['last_activity'] = int(now if now is not None else time.time())


def enforce_session(conn, state, lifetime, client=None, now=None):
    """Per-request gate: expire idle sessions, refresh active ones.

    Returns True when the session was expired and logged out; the caller is
    expected to redirect to the login page.
    """
    if not is_logged_in(state):
        return False

    if is_session_expired(state, lifetime, now=now):
        logger.info("Session for %s expired", state.get('username'))
        logout(conn, state, client=client)
        return True

    touch_session(state, now=now)
    return False


def get_current_user(conn, state):
    """The logged-in User, or None."""
    if not is_logged_in(state):
        return None
    try:
        return conn.get(User, state['user_id'])
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error loading current user: %s", e)
        return None


def get_user_role(conn, role_id):
    if role_id is None:
        return None
    try:
        return conn.get(Role, role_id)
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error loading role %s: %s", role_id, e)
        return None
