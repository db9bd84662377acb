"""
Company id discovery through the hosted Algolia index behind the
Work at a Startup company search.

Only `company_id` is requested per hit. The index is queried with the
public application id and search key, not with the YC session.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

import requests

from src.scraper.config import Credentials, ScraperConfig  # type: ignore
from src.scraper.errors import DiscoveryError  # type: ignore
from src.scraper.http_client import create_session, sanitize_headers, xhr_headers  # type: ignore


LOGGER = logging.getLogger(__name__)

MAX_HITS_PER_PAGE = 100
VISA_FILTER = "(us_visa_required:none OR us_visa_required:possible)"
ALGOLIA_AGENT = "Algolia for JavaScript (3.35.1); Browser"


def build_search_params(page: int, hits_per_page: int) -> str:
    """Build the URL-encoded Algolia params string for one page of ids."""
    params = [
        ("query", ""),
        ("page", page),
        ("filters", VISA_FILTER),
        ("attributesToRetrieve", json.dumps(["company_id"])),
        ("attributesToHighlight", "[]"),
        ("attributesToSnippet", "[]"),
        ("hitsPerPage", hits_per_page),
        # Required by the index settings; no analytics are consumed here
        ("clickAnalytics", "true"),
        ("distinct", "true"),
    ]
    return urlencode(params, quote_via=quote, safe="()")


def extract_company_ids(data: Dict[str, Any]) -> List[int]:
    results = data.get("results") or []
    if not results:
        return []
    hits = (results[0] or {}).get("hits") or []
    ids: List[int] = []
    for hit in hits:
        company_id = hit.get("company_id")
        if company_id is None:
            LOGGER.debug("Skipping hit without company_id: %s", hit.get("objectID"))
            continue
        ids.append(int(company_id))
    return ids


class AlgoliaCompanyDiscovery:
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
        self.index_name = self.config.get("sources.yc.algolia.index_name")
        self.logger = LOGGER

    @property
    def queries_url(self) -> str:
        return f"https://{self.credentials.algolia_app_id}-dsn.algolia.net/1/indexes/*/queries"

    def _headers(self) -> Dict[str, str]:
        portal = self.config.get("sources.yc.urls.portal")
        origin = self.config.get("sources.yc.urls.portal_origin")
        headers = xhr_headers(referer=portal, origin=origin, fetch_site="cross-site")
        headers.update(
            {
                "x-algolia-agent": ALGOLIA_AGENT,
                "x-algolia-application-id": self.credentials.algolia_app_id,
                "x-algolia-api-key": self.credentials.algolia_api_key,
            }
        )
        return headers

    def list_company_ids(self, page: int = 0, hits_per_page: int = MAX_HITS_PER_PAGE) -> List[int]:
        """Fetch one page of company ids in index order.

        Args:
            page: zero-based page number
            hits_per_page: page size, 1..100

        Raises:
            ValueError: on out-of-range arguments
            DiscoveryError: if the search request fails
        """
        if page < 0:
            raise ValueError(f"page must be >= 0, got {page}")
        if not 1 <= hits_per_page <= MAX_HITS_PER_PAGE:
            raise ValueError(
                f"hits_per_page must be between 1 and {MAX_HITS_PER_PAGE}, got {hits_per_page}"
            )

        self.logger.info(f"Fetching company IDs (page {page + 1})...")
        payload = {
            "requests": [
                {
                    "indexName": self.index_name,
                    "params": build_search_params(page, hits_per_page),
                }
            ]
        }
        headers = self._headers()
        self.logger.debug("POST %s headers=%s", self.queries_url, sanitize_headers(headers))

        try:
            resp = self.http.post(
                self.queries_url, json=payload, headers=headers, timeout=self.timeout
            )
            resp.raise_for_status()
            data = resp.json()
            company_ids = extract_company_ids(data)
            nb_hits = ((data.get("results") or [{}])[0] or {}).get("nbHits")
        except requests.RequestException as e:
            self.logger.error("Failed to fetch company IDs (page %d): %s", page + 1, e)
            raise DiscoveryError(f"search request failed for page {page}: {e}") from e
        except (AttributeError, TypeError, ValueError) as e:
            self.logger.error("Failed to decode search response (page %d): %s", page + 1, e)
            raise DiscoveryError(f"invalid search response for page {page}: {e}") from e

        self.logger.info(f"Found {len(company_ids)} company IDs (nbHits={nb_hits})")
        return company_ids
