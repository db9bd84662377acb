"""
YC account login and Work at a Startup session bootstrap.

The login is a short browser-like sequence:
  1. GET the account login page, read its CSRF token and cookies
  2. POST the credentials as JSON (redirects are not followed)
  3. GET the portal companies page with the merged cookies to pick up the
     portal session cookie and the portal CSRF token

The result is a YCSession holding a ready Cookie header and the portal
CSRF token. It lives for one run and is never refreshed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import requests

from src.scraper.config import Credentials, ScraperConfig  # type: ignore
from src.scraper.errors import AuthError  # type: ignore
from src.scraper.http_client import (  # type: ignore
    LOGIN_USER_AGENT,
    browser_page_headers,
    create_session,
    sanitize_headers,
    xhr_headers,
)


LOGGER = logging.getLogger(__name__)

CSRF_TOKEN_RE = re.compile(r'name="csrf-token" content="([^"]+)"')


@dataclass
class YCSession:
    cookies: str
    csrf_token: str


def extract_csrf_token(html: str) -> Optional[str]:
    """Return the csrf-token meta value from an HTML page, or None."""
    m = CSRF_TOKEN_RE.search(html or "")
    return m.group(1) if m else None


def response_cookies(resp: requests.Response) -> Dict[str, str]:
    """Cookies set by a single response, as name -> value."""
    return {cookie.name: cookie.value for cookie in resp.cookies}


def merge_cookies(*cookie_sets: Dict[str, str]) -> Dict[str, str]:
    """Merge cookie dicts in response order; the last value per name wins."""
    merged: Dict[str, str] = {}
    for cookies in cookie_sets:
        for name, value in cookies.items():
            # Re-insert so the header order follows the latest write
            merged.pop(name, None)
            merged[name] = value
    return merged


def cookie_header(cookies: Dict[str, str]) -> str:
    return "; ".join(f"{name}={value}" for name, value in cookies.items())


def _is_login_accepted(status_code: int) -> bool:
    return status_code < 400 or status_code == 302


class YCAuthenticator:
    """Performs the credential login and returns a portal session."""

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ScraperConfig] = None,
        http: Optional[requests.Session] = None,
    ):
        self.credentials = credentials
        self.config = config or ScraperConfig()
        self.http = http or create_session()
        self.timeout = float(self.config.get("common.http_timeout") or 30)
        self.logger = LOGGER

    def _url(self, name: str) -> str:
        return self.config.get(f"sources.yc.urls.{name}")

    def acquire_session(self) -> YCSession:
        """Log in and bootstrap the portal session.

        Raises:
            AuthError: on any failed step; nothing is retried
        """
        self.logger.info("Logging in to YC account...")
        try:
            session = self._login()
        except AuthError as e:
            self.logger.error("Failed to login: %s", e)
            raise
        except requests.RequestException as e:
            self.logger.error("Failed to login: %s", e)
            raise AuthError(f"login request failed: {e}") from e
        self.logger.info("Successfully logged in and established session")
        return session

    def _login(self) -> YCSession:
        login_page_url = self._url("login_page")

        # Step 1: login page for the account CSRF token and initial cookies
        page_headers = browser_page_headers(LOGIN_USER_AGENT)
        self.logger.debug("GET %s headers=%s", login_page_url, sanitize_headers(page_headers))
        login_page = self.http.get(login_page_url, headers=page_headers, timeout=self.timeout)
        login_page.raise_for_status()

        csrf_token = extract_csrf_token(login_page.text)
        if not csrf_token:
            raise AuthError("missing csrf token")
        initial_cookies = response_cookies(login_page)
        self.logger.debug("Login page cookies=%d", len(initial_cookies))

        # Step 2: credential POST, redirects not followed
        login_resp = self._post_credentials(csrf_token, cookie_header(initial_cookies))
        if not _is_login_accepted(login_resp.status_code):
            self.logger.debug("Sign-in rejected with status %s", login_resp.status_code)
            raise AuthError("login rejected")

        # Step 3: account cookies, later responses win
        account_cookies = merge_cookies(initial_cookies, response_cookies(login_resp))

        # Step 4: portal landing page for the portal session and CSRF token
        portal_headers = browser_page_headers(LOGIN_USER_AGENT)
        portal_headers["Cookie"] = cookie_header(account_cookies)
        portal_url = self._url("companies_page")
        self.logger.debug("GET %s headers=%s", portal_url, sanitize_headers(portal_headers))
        portal_resp = self.http.get(portal_url, headers=portal_headers, timeout=self.timeout)
        portal_resp.raise_for_status()

        portal_token = extract_csrf_token(portal_resp.text) or ""
        if not portal_token:
            self.logger.warning("Portal page carried no csrf token; continuing with empty token")

        # Step 5: final cookie set
        final_cookies = merge_cookies(account_cookies, response_cookies(portal_resp))
        self.logger.debug("Session cookies=%d names=%s", len(final_cookies), _names(final_cookies))

        return YCSession(cookies=cookie_header(final_cookies), csrf_token=portal_token)

    def _post_credentials(self, csrf_token: str, cookies: str) -> requests.Response:
        payload = {
            "ycid": self.credentials.yc_username,
            "password": self.credentials.yc_password,
            "captcha": None,
            "totp": "",
            "continue": self._url("portal"),
        }
        headers = xhr_headers(
            referer=self._url("login_page"),
            origin=self._url("account_origin"),
            user_agent=LOGIN_USER_AGENT,
        )
        headers.update(
            {
                "x-csrf-token": csrf_token,
                "x-requested-with": "XMLHttpRequest",
                "DNT": "1",
                "Cookie": cookies,
            }
        )
        sign_in_url = self._url("sign_in")
        self.logger.debug("POST %s headers=%s", sign_in_url, sanitize_headers(headers))
        return self.http.post(
            sign_in_url,
            json=payload,
            headers=headers,
            timeout=self.timeout,
            allow_redirects=False,
        )


def _names(cookies: Iterable[str]) -> str:
    return ",".join(cookies)
