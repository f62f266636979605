"""
Activity Log Services

Append-only audit trail. Writes are fire-and-forget: a failed audit write is
logged for operators and never aborts the action that triggered it.
"""

import logging
from collections import namedtuple

from sqlalchemy.exc import SQLAlchemyError

from alphanews.models import ActivityLog, User

logger = logging.getLogger(__name__)

ClientInfo = namedtuple('ClientInfo', ['ip_address', 'user_agent'])
ClientInfo.__new__.__defaults__ = (None, None)


def client_info(request):
    """Build a ClientInfo from a Flask/Werkzeug request."""
    user_agent = request.user_agent.string or None
    if user_agent:
        user_agent = user_agent[:255]
    return ClientInfo(ip_address=request.remote_addr, user_agent=user_agent)


def log_activity(conn, user_id, action, entity_type=None, entity_id=None, description=None, client=None):
    """Append one activity row. Never raises on data-access failure."""
    client = client or ClientInfo()
    entry = ActivityLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        description=description,
        ip_address=client.ip_address,
        user_agent=client.user_agent,
    )
    try:
        conn.add(entry)
        conn.commit()
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error writing activity log (%s by user %s): %s", action, user_id, e)


def recent_logs(conn, limit=5):
    """Newest activity first, with the acting username (None if unknown)."""
    try:
        rows = (conn.query(ActivityLog.id,
                           ActivityLog.user_id,
                           ActivityLog.action,
                           ActivityLog.entity_type,
                           ActivityLog.entity_id,
                           ActivityLog.description,
                           ActivityLog.created_at,
                           User.username)
                .outerjoin(User, ActivityLog.user_id == User.id)
                .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
                .limit(max(int(limit), 0))
                .all())
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching activity logs: %s", e)
        return []

    return [row._asdict() for row in rows]
