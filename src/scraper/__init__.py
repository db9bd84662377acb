"""
Core scraping functionality for the YC Companies Scraper
"""

from .config import Credentials, ScraperConfig, load_credentials
from .errors import AuthError, DiscoveryError, ExtractionError, FetchError
from .yc_extractor import YCDataExtractor

__all__ = [
    "AuthError",
    "Credentials",
    "DiscoveryError",
    "ExtractionError",
    "FetchError",
    "ScraperConfig",
    "YCDataExtractor",
    "load_credentials",
]
