"""
Tests for the shared HTTP plumbing, including a login against a local
server that compresses pages with whatever encoding the client offers.
"""

import gzip
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from urllib3.util.request import ACCEPT_ENCODING as DECODABLE_ENCODINGS

from src.scraper.http_client import (
    browser_page_headers,
    create_session,
    sanitize_headers,
    xhr_headers,
)
from src.scraper.yc_auth import YCAuthenticator

LOGIN_HTML = '<html><head><meta name="csrf-token" content="account-token" /></head></html>'
PORTAL_HTML = '<html><head><meta name="csrf-token" content="portal-token" /></head></html>'


def _offered(headers):
    return [e.strip() for e in headers["Accept-Encoding"].split(",") if e.strip()]


def test_only_decodable_encodings_are_offered():
    supported = {e.strip() for e in DECODABLE_ENCODINGS.split(",")}
    for headers in (browser_page_headers(), xhr_headers("https://a.test/", "https://a.test")):
        assert _offered(headers) == ["gzip", "deflate"]
        assert set(_offered(headers)) <= supported


def test_sanitize_headers_masks_secrets():
    masked = sanitize_headers({"Cookie": "a=1", "x-csrf-token": "tok", "Accept": "json"})
    assert masked == {"Cookie": "<len=3>", "x-csrf-token": "<len=3>", "Accept": "json"}


def test_create_session_does_not_retry():
    session = create_session()
    retry = session.get_adapter("https://example.test/").max_retries
    assert retry.total == 0


class _LoginSiteHandler(BaseHTTPRequestHandler):
    """Serves br bodies when br is offered, gzip otherwise."""

    def _send_page(self, html, cookie):
        offered = self.headers.get("Accept-Encoding", "")
        if "br" in offered:
            # Not a valid brotli stream: undecodable either way
            body, encoding = b"\x1b\x2a\x00\xf8\x1d\xa9not-brotli", "br"
        else:
            body, encoding = gzip.compress(html.encode("utf-8")), "gzip"
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Encoding", encoding)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Set-Cookie", cookie)
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path.startswith("/login"):
            self._send_page(LOGIN_HTML, "sid=first; Path=/")
        elif self.path == "/companies":
            self._send_page(PORTAL_HTML, "_waas_session=portal; Path=/")
        else:
            self.send_error(404)

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self.send_response(302)
        self.send_header("Location", "/companies")
        self.send_header("Set-Cookie", "sid=second; Path=/")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def login_site(monkeypatch):
    for name in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    server = ThreadingHTTPServer(("127.0.0.1", 0), _LoginSiteHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_login_against_compressing_server(credentials, config, login_site):
    config.update("sources.yc.urls.login_page", f"{login_site}/login?continue=x")
    config.update("sources.yc.urls.sign_in", f"{login_site}/sign_in")
    config.update("sources.yc.urls.account_origin", login_site)
    config.update("sources.yc.urls.portal", f"{login_site}/")
    config.update("sources.yc.urls.companies_page", f"{login_site}/companies")
    config.update("common.http_timeout", 5)

    session = YCAuthenticator(credentials, config).acquire_session()

    assert session.csrf_token == "portal-token"
    assert "_waas_session=portal" in session.cookies
