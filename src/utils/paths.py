"""
Centralized path helpers for scraper outputs derived from YAML config.
"""

from pathlib import Path
from typing import Optional

from src.scraper.config import ScraperConfig  # type: ignore


def _cfg(config: Optional[ScraperConfig]) -> ScraperConfig:
    return config or ScraperConfig()


def _resolve_rel(c: ScraperConfig, p: str) -> Path:
    """Resolve a possibly-relative path against the config file directory.

    If "p" is absolute, return it as-is. If it's relative, interpret it
    relative to the directory containing the active YAML config file.
    """
    path = Path(p)
    if path.is_absolute():
        return path
    base = Path(".")
    if getattr(c, "config_path", None):
        cfg_dir = Path(c.config_path).parent
        # If config file is under a 'config/' directory, treat its parent as project root
        base = cfg_dir.parent if cfg_dir.name == "config" else cfg_dir
    return base / path


def get_output_dir(config: Optional[ScraperConfig] = None) -> Path:
    c = _cfg(config)
    return _resolve_rel(c, c.get("common.paths.output_dir") or "data")


def get_output_path(config: Optional[ScraperConfig] = None) -> Path:
    c = _cfg(config)
    filename = c.get("sources.yc.output_filename") or "yc_companies_data.json"
    return get_output_dir(c) / filename


def get_jobs_csv_path(config: Optional[ScraperConfig] = None) -> Path:
    c = _cfg(config)
    filename = c.get("sources.yc.jobs_csv_filename") or "yc_jobs.csv"
    return get_output_dir(c) / filename
