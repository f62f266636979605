"""
Activity Log Model
"""

from alphanews.extensions import db
from alphanews.models.user import utc_now


class ActivityLog(db.Model):
    """Append-only audit entry; user_id is NULL for anonymous/system actions"""
    __tablename__ = 'activity_logs'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, index=True)
    action = db.Column(db.String(50), nullable=False)
    entity_type = db.Column(db.String(50))
    entity_id = db.Column(db.Integer)
    description = db.Column(db.Text)
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False, index=True)

    def __repr__(self):
        return f'<ActivityLog {self.action} user:{self.user_id}>'
