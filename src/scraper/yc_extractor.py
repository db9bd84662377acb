"""
Main YC company extraction flow.

Sequence: Algolia id discovery (page by page) -> batched company detail
fetches with a lazily acquired YC session -> formatting. Every call is made
one after another with fixed pauses in between; any failure aborts the run.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from src.scraper.algolia_discovery import MAX_HITS_PER_PAGE, AlgoliaCompanyDiscovery  # type: ignore
from src.scraper.company_fetcher import CompanyFetcher  # type: ignore
from src.scraper.config import Credentials, ScraperConfig, load_credentials  # type: ignore
from src.scraper.formatter import count_jobs, format_companies  # type: ignore
from src.scraper.http_client import create_session  # type: ignore
from src.scraper.yc_auth import YCAuthenticator, YCSession  # type: ignore


LOGGER = logging.getLogger(__name__)


def chunked(items: List[int], size: int) -> List[List[int]]:
    """Split items into consecutive batches of at most `size`."""
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    return [items[i : i + size] for i in range(0, len(items), size)]


class YCDataExtractor:
    """
    Orchestrates one extraction run.

    Components can be injected; otherwise they are built from the
    credentials and config and share a single HTTP session.
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        config: Optional[ScraperConfig] = None,
        discovery: Optional[AlgoliaCompanyDiscovery] = None,
        fetcher: Optional[CompanyFetcher] = None,
        authenticator: Optional[YCAuthenticator] = None,
    ):
        self.config = config or ScraperConfig()
        self.logger = LOGGER

        if discovery is None or authenticator is None or fetcher is None:
            credentials = credentials or load_credentials()
            http = create_session()
            discovery = discovery or AlgoliaCompanyDiscovery(credentials, self.config, http)
            fetcher = fetcher or CompanyFetcher(self.config, http)
            authenticator = authenticator or YCAuthenticator(credentials, self.config, http)

        self.discovery = discovery
        self.fetcher = fetcher
        self.authenticator = authenticator
        self.session: Optional[YCSession] = None

        self.batch_size = int(self.config.get("sources.yc.batch_size") or 20)
        self.discovery_delay = float(self.config.get("sources.yc.delays.discovery_seconds", 1.0))
        self.batch_delay = float(self.config.get("sources.yc.delays.batch_seconds", 2.0))

    def collect_company_ids(self, max_companies: int) -> List[int]:
        """Page through the index until max_companies ids are collected."""
        if max_companies <= 0:
            return []

        hits_per_page = min(max_companies, MAX_HITS_PER_PAGE)
        num_pages = (max_companies + hits_per_page - 1) // hits_per_page
        self.logger.info(
            f"Planned discovery pages: {num_pages} (hits_per_page={hits_per_page})"
        )

        company_ids: List[int] = []
        for page in range(num_pages):
            if len(company_ids) >= max_companies:
                break
            if page > 0:
                self.logger.debug(f"Sleeping {self.discovery_delay:.2f}s before next page request")
                time.sleep(self.discovery_delay)
            company_ids.extend(self.discovery.list_company_ids(page, hits_per_page))

        # Duplicates across pages are kept; only the count is bounded
        return company_ids[:max_companies]

    def _ensure_session(self) -> YCSession:
        if self.session is None:
            self.session = self.authenticator.acquire_session()
        return self.session

    def fetch_company_details(self, company_ids: List[int]) -> List[Dict[str, Any]]:
        """Fetch details batch by batch, in id order."""
        batches = chunked(company_ids, self.batch_size)
        companies: List[Dict[str, Any]] = []
        for idx, batch in enumerate(batches):
            if idx > 0:
                self.logger.debug(f"Sleeping {self.batch_delay:.2f}s before next batch")
                time.sleep(self.batch_delay)
            session = self._ensure_session()
            self.logger.info(f"Batch {idx + 1}/{len(batches)}: {len(batch)} ids")
            companies.extend(self.fetcher.fetch_companies(batch, session))
        return companies

    def extract_data(self, max_companies: int = 50) -> List[Dict[str, Any]]:
        """
        Run discovery, batched fetch and formatting.

        Args:
            max_companies: upper bound on company ids processed

        Returns:
            Formatted company records in fetch order
        """
        if max_companies < 0:
            raise ValueError(f"max_companies must be >= 0, got {max_companies}")

        self.logger.info("Starting YC data extraction...")
        company_ids = self.collect_company_ids(max_companies)

        if not company_ids:
            self.logger.info("No company IDs found")
            return []

        self.logger.info(f"Collected {len(company_ids)} company IDs")
        companies = self.fetch_company_details(company_ids)
        formatted = format_companies(companies)

        self.logger.info("Extraction completed successfully!")
        self.logger.info(f"Total companies extracted: {len(formatted)}")
        self.logger.info(f"Total jobs found: {count_jobs(formatted)}")
        return formatted
