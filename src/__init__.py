"""
YC Companies Scraper Package

Extracts company and open-role listings from YC's Work at a Startup portal.
"""

__version__ = "1.0.0"
__author__ = "YC Companies Scraper Team"
__description__ = "A one-shot extractor for Work at a Startup company listings"

# Avoid importing submodules here to prevent import issues
# Individual modules should handle their own imports

__all__: list[str] = []
