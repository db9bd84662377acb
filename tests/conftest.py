"""
Shared fixtures: credentials, an isolated config and fake HTTP responses.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests
from requests.cookies import cookiejar_from_dict

from src.scraper.config import Credentials, ScraperConfig
from src.scraper.yc_auth import YCSession


@pytest.fixture
def credentials():
    return Credentials(
        yc_username="founder@example.com",
        yc_password="hunter2",
        algolia_app_id="TESTAPP",
        algolia_api_key="search-key",
    )


@pytest.fixture
def config(tmp_path):
    # Point at a missing YAML so only in-code defaults apply
    return ScraperConfig(str(tmp_path / "config" / "scraper_config.yaml"))


@pytest.fixture
def yc_session():
    return YCSession(cookies="_sso.key=abc; _waas_session=xyz", csrf_token="portal-token")


@pytest.fixture
def make_response():
    """Build real requests.Response objects for a mocked Session."""

    def _make(status=200, text=None, json_data=None, cookies=None, url="https://example.test/"):
        resp = requests.Response()
        resp.status_code = status
        resp.url = url
        resp.encoding = "utf-8"
        if json_data is not None:
            resp._content = json.dumps(json_data).encode("utf-8")
            resp.headers["Content-Type"] = "application/json"
        else:
            resp._content = (text or "").encode("utf-8")
            resp.headers["Content-Type"] = "text/html"
        resp.cookies = cookiejar_from_dict(cookies or {})
        return resp

    return _make


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)
