"""Server-side sessions stored in the web_sessions table.

The cookie only carries an opaque session id; the payload lives in the
database next to the rest of the application data.
"""
import json
import logging
import secrets

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from memosphere import storage
from memosphere.models import utcnow

logger = logging.getLogger(__name__)


class ServerSideSession(CallbackDict, SessionMixin):

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False


class DatabaseSessionInterface(SessionInterface):

    def _new_session(self):
        return ServerSideSession(sid=secrets.token_urlsafe(32), new=True)

    def open_session(self, app, request):
        sid = request.cookies.get(self.get_cookie_name(app))
        if not sid:
            return self._new_session()

        stored = storage.get_web_session(sid)
        if stored is None:
            return self._new_session()
        now = utcnow()
        if stored.expires_at <= now:
            # Sweeps this row along with any other stale ones
            removed = storage.delete_expired_web_sessions(now)
            logger.info("Removed %d expired session(s)", removed)
            return self._new_session()
        try:
            data = json.loads(stored.data)
        except ValueError:
            logger.warning("Discarding unreadable session payload")
            return self._new_session()
        return ServerSideSession(data, sid=sid)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                storage.delete_web_session(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not self.should_set_cookie(app, session):
            return

        expires = self.get_expiration_time(app, session)
        stored_until = expires or utcnow() + app.permanent_session_lifetime
        storage.save_web_session(session.sid, json.dumps(dict(session)), stored_until.replace(tzinfo=None))
        response.set_cookie(
            name,
            session.sid,
            expires=expires,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )


def regenerate_session(session):
    """Move the session to a new id and drop the stored row for the old one."""
    if not session.new:
        storage.delete_web_session(session.sid)
    session.clear()
    session.sid = secrets.token_urlsafe(32)
    session.new = True
