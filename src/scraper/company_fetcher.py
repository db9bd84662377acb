"""
Batch company details from the Work at a Startup internal fetch endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from src.scraper.config import ScraperConfig  # type: ignore
from src.scraper.errors import FetchError  # type: ignore
from src.scraper.http_client import create_session, sanitize_headers, xhr_headers  # type: ignore
from src.scraper.yc_auth import YCSession  # type: ignore


LOGGER = logging.getLogger(__name__)


class CompanyFetcher:
    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        http: Optional[requests.Session] = None,
    ):
        self.config = config or ScraperConfig()
        self.http = http or create_session()
        self.timeout = float(self.config.get("common.http_timeout") or 30)
        self.fetch_url = self.config.get("sources.yc.urls.companies_fetch")
        self.logger = LOGGER

    def _headers(self, session: YCSession) -> Dict[str, str]:
        headers = xhr_headers(
            referer=self.config.get("sources.yc.urls.companies_page"),
            origin=self.config.get("sources.yc.urls.portal_origin"),
        )
        headers.update(
            {
                "x-csrf-token": session.csrf_token,
                "x-requested-with": "XMLHttpRequest",
                "Cookie": session.cookies,
                "Pragma": "no-cache",
                "Cache-Control": "no-cache",
            }
        )
        return headers

    def fetch_companies(self, company_ids: Sequence[int], session: YCSession) -> List[Dict[str, Any]]:
        """Fetch full company records for one batch of ids.

        Returns the `companies` array as sent by the server (server order),
        or an empty list when the field is missing.

        Raises:
            ValueError: if company_ids is empty
            FetchError: if the request fails
        """
        if not company_ids:
            raise ValueError("company_ids must not be empty")

        ids = list(company_ids)
        self.logger.info(f"Fetching details for {len(ids)} companies...")
        headers = self._headers(session)
        self.logger.debug("POST %s headers=%s", self.fetch_url, sanitize_headers(headers))

        try:
            resp = self.http.post(
                self.fetch_url, json={"ids": ids}, headers=headers, timeout=self.timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            self.logger.error("Failed to fetch company details: %s", e)
            raise FetchError(f"company fetch failed for {len(ids)} ids: {e}") from e
        except ValueError as e:
            self.logger.error("Failed to decode company details response: %s", e)
            raise FetchError(f"invalid company fetch response: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict) or not isinstance(data.get("companies") or [], list):
            self.logger.error("Unexpected company details payload: %s", type(data).__name__)
            raise FetchError("invalid company fetch response: expected an object with a companies list")

        companies = list(data.get("companies") or [])
        self.logger.info(f"Successfully fetched details for {len(companies)} companies")
        return companies
