"""
Session middleware
The signed cookie holds an opaque session id; the state itself stays in a SessionStore
"""

from typing import Optional
import logging

from itsdangerous import BadSignature, TimestampSigner
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from storefront.core.session_store import ServerSession, SessionStore

logger = logging.getLogger(__name__)


class SessionMiddleware:
    """Expose the stored session as ``request.session`` and persist it on response"""

    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore,
        secret_key: str,
        session_cookie: str = "session",
        max_age: Optional[int] = 24 * 60 * 60,
        path: str = "/",
        same_site: str = "lax",
        https_only: bool = False,
    ):
        self.app = app
        self.store = store
        self.signer = TimestampSigner(str(secret_key))
        self.session_cookie = session_cookie
        self.max_age = max_age
        self.path = path
        self.security_flags = "httponly; samesite=" + same_site
        if https_only:
            self.security_flags += "; secure"

    def _read_session_id(self, cookie: Optional[str]) -> Optional[str]:
        if not cookie:
            return None
        try:
            return self.signer.unsign(cookie.encode("utf-8"), max_age=self.max_age).decode("utf-8")
        except BadSignature:
            logger.debug("Ignoring session cookie with a bad or expired signature")
            return None

    def _set_cookie(self, value: str, expire: bool = False) -> str:
        if expire:
            lifetime = "expires=Thu, 01 Jan 1970 00:00:00 GMT; "
        else:
            lifetime = f"Max-Age={self.max_age}; " if self.max_age else ""
        return f"{self.session_cookie}={value}; path={self.path}; {lifetime}{self.security_flags}"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        had_cookie = self.session_cookie in connection.cookies
        session_id = self._read_session_id(connection.cookies.get(self.session_cookie))

        data = self.store.load(session_id) if session_id else None
        session = ServerSession(session_id if data is not None else None, data)
        scope["session"] = session

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)

                if session.session_id and (session.rotated or not session):
                    self.store.delete(session.session_id)

                if session:
                    if session.session_id and not session.rotated:
                        current_id = session.session_id
                    else:
                        current_id = self.store.new_id()
                    self.store.save(current_id, session)
                    signed = self.signer.sign(current_id.encode("utf-8")).decode("utf-8")
                    headers.append("Set-Cookie", self._set_cookie(signed))
                elif had_cookie:
                    headers.append("Set-Cookie", self._set_cookie("null", expire=True))

            await send(message)

        await self.app(scope, receive, send_wrapper)
