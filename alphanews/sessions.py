"""
Server-side Sessions

The session cookie carries only an opaque random token. Session state is
stored in the ``sessions`` table and lives until it is emptied (logout) or
its row expires after ``permanent_session_lifetime`` (``SESSION_STORE_LIFETIME``),
which is longer than the admin inactivity limit.
"""

import logging
import secrets

from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import CallbackDict

from alphanews.extensions import db
from alphanews.models import SessionRecord, utc_now

logger = logging.getLogger(__name__)


class ServerSession(CallbackDict, SessionMixin):
    """Session mapping that remembers its token and whether it changed."""

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False


class DatabaseSessionInterface(SessionInterface):
    """Stores session state in the database, keyed by the cookie token."""

    serializer = TaggedJSONSerializer()
    session_class = ServerSession

    @staticmethod
    def generate_sid():
        return secrets.token_urlsafe(32)

    def _fresh(self):
        return self.session_class(sid=self.generate_sid(), new=True)

    def open_session(self, app, request):
        sid = request.cookies.get(self.get_cookie_name(app))
        if not sid:
            return self._fresh()

        try:
            record = db.session.get(SessionRecord, sid)
            if record is None:
                return self._fresh()
            if record.expiry <= utc_now():
                db.session.delete(record)
                db.session.commit()
                return self._fresh()
            data = self.serializer.loads(record.data)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Could not load session: %s", e)
            return self._fresh()
        except ValueError:
            logger.warning("Discarding undecodable session %s...", sid[:8])
            return self._fresh()

        return self.session_class(data, sid=sid)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self._destroy(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        response.vary.add('Cookie')
        if not self.should_set_cookie(app, session):
            return

        try:
            record = db.session.get(SessionRecord, session.sid)
            if record is None:
                record = SessionRecord(sid=session.sid)
                db.session.add(record)
            record.data = self.serializer.dumps(dict(session))
            record.expiry = utc_now() + app.permanent_session_lifetime
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Could not store session %s...", session.sid[:8])
            return

        response.set_cookie(
            name,
            session.sid,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )

    def _destroy(self, sid):
        try:
            db.session.query(SessionRecord).filter_by(sid=sid).delete()
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Could not destroy session %s...", sid[:8])
