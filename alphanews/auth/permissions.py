"""
Authorization

Permissions are resolved through users -> role_permissions -> permissions on
every check. The session only ever carries the role id.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from alphanews.auth.service import is_logged_in
from alphanews.models import User, Permission, role_permissions

logger = logging.getLogger(__name__)

DEFAULT_PERMISSIONS = {
    'access_dashboard': 'Access the admin dashboard',
    'create_article': 'Create articles',
    'publish_article': 'Publish articles',
    'edit_own_article': 'Edit own articles',
    'edit_any_article': 'Edit any article',
    'delete_own_article': 'Delete own articles',
    'delete_any_article': 'Delete any article',
    'manage_categories': 'Manage categories and tags',
    'manage_comments': 'Moderate comments',
    'manage_users': 'Manage users',
    'manage_roles': 'Manage roles and permissions',
    'manage_settings': 'Manage site settings',
    'manage_media': 'Upload and manage media',
}

DEFAULT_ROLES = {
    'Administrator': ('Full access', tuple(DEFAULT_PERMISSIONS)),
    'Editor': ('Edits and publishes content', (
        'access_dashboard', 'create_article', 'publish_article', 'edit_own_article',
        'edit_any_article', 'delete_own_article', 'manage_categories', 'manage_comments',
        'manage_media',
    )),
    'Author': ('Writes articles', (
        'access_dashboard', 'create_article', 'edit_own_article', 'delete_own_article',
        'manage_media',
    )),
}


def has_permission(conn, state, name):
    """True iff the logged-in user's role grants ``name``.

    Anonymous users have no permissions; a data-access failure denies.
    """
    if not is_logged_in(state):
        return False

    try:
        count = (conn.query(func.count())
                 .select_from(role_permissions)
                 .join(Permission, role_permissions.c.permission_id == Permission.id)
                 .join(User, User.role_id == role_permissions.c.role_id)
                 .filter(User.id == state['user_id'], Permission.name == name)
                 .scalar())
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error checking permission %r: %s", name, e)
        return False

    return bool(count)
