"""
Utility functions for the YC Companies Scraper
"""

from .logging_utils import setup_logging
from .raw_storage import save_companies_json

__all__ = ["save_companies_json", "setup_logging"]
