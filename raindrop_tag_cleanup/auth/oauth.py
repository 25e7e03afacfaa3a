"""OAuth authorization-code flow with a local redirect listener."""

import threading
import webbrowser
from enum import Enum
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Optional
from urllib.parse import parse_qs, unquote, urlencode, urlparse

from ..api.raindrop_client import RaindropAPIError, exchange_code
from ..config import AUTH_POLL_INTERVAL, REDIRECT_PATH, REDIRECT_PORT

AUTHORIZE_URL = "https://raindrop.io/oauth/authorize"

_SUCCESS_PAGE = (
    b"<html><body><h1>Raindrop authorization complete</h1>"
    b"<p>You can close this tab and return to the terminal.</p></body></html>"
)
_MISSING_CODE_PAGE = (
    b"<html><body><h1>Authorization failed</h1>"
    b"<p>No authorization code in the redirect.</p></body></html>"
)


class AuthorizationError(Exception):
    """Raised when the OAuth flow can't produce an access token."""


class AuthState(Enum):
    INIT = "init"
    AWAITING_REDIRECT = "awaiting_redirect"
    EXCHANGING = "exchanging"
    AUTHORIZED = "authorized"
    FAILED = "failed"


class AuthorizationCode:
    """Write-once cell shared between the redirect listener and the main flow."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._value: Optional[str] = None

    def set(self, code: str) -> bool:
        """Store the code. Returns False if a code was already stored."""
        with self._lock:
            if self._ready.is_set():
                return False
            self._value = code
            self._ready.set()
            return True

    def wait(self, timeout: Optional[float] = None) -> Optional[str]:
        """Block until a code is stored or the timeout elapses."""
        self._ready.wait(timeout)
        return self._value

    @property
    def value(self) -> Optional[str]:
        return self._value


class AuthSession:
    """OAuth client credentials plus the code captured from the redirect."""

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.code = AuthorizationCode()


def build_authorization_url(client_id: str, redirect_uri: str) -> str:
    """Build the Raindrop authorization URL for the given client."""
    if not client_id or not redirect_uri:
        raise AuthorizationError("client id and redirect URI are required")
    query = urlencode({"client_id": client_id, "redirect_uri": redirect_uri})
    return f"{AUTHORIZE_URL}?{query}"


def open_browser(url: str) -> bool:
    """Try to open the URL in the user's browser.

    Returns:
        True if a browser was launched, False otherwise
    """
    try:
        return webbrowser.open(url)
    except webbrowser.Error as e:
        print(f"⚠️  Couldn't open your browser automatically: {e}")
        return False


def _make_handler(session: AuthSession, path: str):
    class _RedirectHandler(BaseHTTPRequestHandler):
        def do_GET(self):  # noqa: N802
            parsed = urlparse(self.path)
            if parsed.path != path:
                self._respond(404, b"<html><body><h1>Not found</h1></body></html>")
                return

            code = (parse_qs(parsed.query).get("code") or [None])[0]
            if not code:
                self._respond(400, _MISSING_CODE_PAGE)
                return

            session.code.set(code)
            self._respond(200, _SUCCESS_PAGE)

        def _respond(self, status: int, body: bytes):
            self.send_response(status)
            self.send_header("Content-Type", "text/html; charset=utf-8")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):  # noqa: A002
            # Keep request logs off the operator's terminal
            return

    return _RedirectHandler


class RedirectListener:
    """Local HTTP server that captures the OAuth redirect on a background thread."""

    def __init__(
        self,
        session: AuthSession,
        host: str = "localhost",
        port: int = REDIRECT_PORT,
        path: str = REDIRECT_PATH,
    ):
        self.session = session
        self.host = host
        self.port = port
        self.path = path
        self._server: Optional[HTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Bind the port and start serving in a daemon thread.

        Raises:
            OSError: If the port can't be bound.
        """
        self._server = HTTPServer(
            (self.host, self.port), _make_handler(self.session, self.path)
        )
        # Port 0 binds an ephemeral port
        self.port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._server = None


class OAuthCoordinator:
    """Drives the authorization-code flow from URL to access token."""

    def __init__(
        self,
        session: AuthSession,
        listener: Optional[RedirectListener] = None,
        launch_browser: bool = True,
        poll_interval: float = AUTH_POLL_INTERVAL,
        timeout: Optional[float] = None,
    ):
        """Initialize the coordinator.

        Args:
            session: Client credentials and the shared code cell
            listener: Redirect listener. Defaults to one bound to the redirect URI's port.
            launch_browser: If True, try to open the authorization URL in a browser
            poll_interval: Seconds between "waiting" notices while awaiting the redirect
            timeout: Seconds to wait for the redirect. None waits forever.
        """
        self.session = session
        if listener is None:
            redirect = urlparse(session.redirect_uri)
            listener = RedirectListener(
                session,
                host=redirect.hostname or "localhost",
                port=redirect.port or 80,
                path=redirect.path or "/",
            )
        self.listener = listener
        self.launch_browser = launch_browser
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.state = AuthState.INIT

    def authorize(self) -> str:
        """Run the full flow and return the access token.

        Raises:
            AuthorizationError: If any step fails.
        """
        try:
            auth_url = build_authorization_url(
                self.session.client_id, self.session.redirect_uri
            )
            try:
                self.listener.start()
            except OSError as e:
                raise AuthorizationError(
                    f"Failed to listen for OAuth callback on port {self.listener.port}: {e}"
                ) from e

            self.state = AuthState.AWAITING_REDIRECT
            try:
                self._present_url(auth_url)
                code = self._wait_for_code()
            finally:
                self.listener.stop()

            self.state = AuthState.EXCHANGING
            try:
                token = exchange_code(
                    code,
                    self.session.client_id,
                    self.session.client_secret,
                    self.session.redirect_uri,
                )
            except RaindropAPIError as e:
                raise AuthorizationError(f"Failed to get access token: {e}") from e
        except AuthorizationError:
            self.state = AuthState.FAILED
            raise

        self.state = AuthState.AUTHORIZED
        print("✅ Authorized with Raindrop.io")
        return token

    def _present_url(self, auth_url: str) -> None:
        print(f"🔑 Authorization URL: {unquote(auth_url)}")
        if self.launch_browser and not open_browser(auth_url):
            print("⚠️  Open the URL above in your browser to continue")

    def _wait_for_code(self) -> str:
        waited = 0.0
        while True:
            interval = self.poll_interval
            if self.timeout is not None:
                remaining = self.timeout - waited
                if remaining <= 0:
                    raise AuthorizationError(
                        f"Timed out after {self.timeout:g}s waiting for Raindrop authorization"
                    )
                interval = min(interval, remaining)

            code = self.session.code.wait(interval)
            if code:
                return code
            waited += interval
            print("⏳ Waiting for Raindrop.io authorization...")
