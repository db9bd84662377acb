"""
Shared HTTP plumbing: session factory and the browser-like header sets
the YC and Algolia endpoints expect.
"""

from typing import Dict

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


LOGIN_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:128.0) Gecko/20100101 Firefox/128.0"
)
API_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:141.0) Gecko/20100101 Firefox/141.0"
)

# requests decodes br/zstd only with optional codec packages installed
ACCEPT_ENCODING = "gzip, deflate"

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"


def create_session(retries: int = 0) -> requests.Session:
    """Create a requests Session for one extraction run.

    Retries stay at zero: a failed call aborts the run.
    """
    session = requests.Session()
    retry = Retry(
        total=retries,
        read=retries,
        connect=retries,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def browser_page_headers(user_agent: str = LOGIN_USER_AGENT) -> Dict[str, str]:
    """Headers for a top-level HTML navigation."""
    return {
        "User-Agent": user_agent,
        "Accept": HTML_ACCEPT,
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": ACCEPT_ENCODING,
        "DNT": "1",
        "Sec-GPC": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


def xhr_headers(
    referer: str,
    origin: str,
    fetch_site: str = "same-origin",
    user_agent: str = API_USER_AGENT,
) -> Dict[str, str]:
    """Headers for a JSON fetch issued by page scripts."""
    return {
        "User-Agent": user_agent,
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": ACCEPT_ENCODING,
        "Referer": referer,
        "content-type": "application/json",
        "Origin": origin,
        "Sec-GPC": "1",
        "Connection": "keep-alive",
        "Sec-Fetch-Dest": "empty",
        "Sec-Fetch-Mode": "cors",
        "Sec-Fetch-Site": fetch_site,
    }


def sanitize_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Mask secrets for debug logging."""
    secret = {"cookie", "x-csrf-token", "x-algolia-api-key"}
    return {k: (f"<len={len(v)}>" if k.lower() in secret else v) for k, v in headers.items()}
