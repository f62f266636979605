"""
Site Setting and Session Storage Models
"""

from alphanews.extensions import db
from alphanews.models.user import utc_now


class Setting(db.Model):
    """Site-wide key/value setting; a missing key falls back to a default"""
    __tablename__ = 'settings'

    id = db.Column(db.Integer, primary_key=True)
    setting_key = db.Column(db.String(100), unique=True, nullable=False)
    setting_value = db.Column(db.Text)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f'<Setting {self.setting_key}>'


class SessionRecord(db.Model):
    """Server-side session state, keyed by the opaque token in the cookie"""
    __tablename__ = 'sessions'

    sid = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.Text, nullable=False)
    expiry = db.Column(db.DateTime, nullable=False, index=True)

    def __repr__(self):
        return f'<SessionRecord {self.sid[:8]}>'
