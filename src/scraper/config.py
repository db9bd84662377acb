"""
Configuration management for the YC Companies Scraper
"""

import os
import yaml
from dataclasses import dataclass
from typing import Dict, Any, Optional

from dotenv import load_dotenv


REQUIRED_ENV_VARS = (
    "YC_USERNAME",
    "YC_PASSWORD",
    "ALGOLIA_APP_ID",
    "ALGOLIA_API_KEY",
)


@dataclass(frozen=True)
class Credentials:
    """Secrets needed for one extraction run."""

    yc_username: str
    yc_password: str
    algolia_app_id: str
    algolia_api_key: str


def load_credentials(env: Optional[Dict[str, str]] = None) -> Credentials:
    """
    Read and validate the four required secrets.

    Values come from the process environment (after loading a local .env)
    unless an explicit mapping is passed.

    Raises:
        EnvironmentError: if any variable is missing or blank
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    values = {name: (env.get(name) or "").strip() for name in REQUIRED_ENV_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise EnvironmentError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "For local runs, create a .env at repo root with these keys "
            "or export them in your shell."
        )

    return Credentials(
        yc_username=values["YC_USERNAME"],
        yc_password=values["YC_PASSWORD"],
        algolia_app_id=values["ALGOLIA_APP_ID"],
        algolia_api_key=values["ALGOLIA_API_KEY"],
    )


class ScraperConfig:
    """
    Configuration management for the YC Companies Scraper.

    Handles loading non-secret settings from YAML files and environment
    variables. Credentials are kept out of here (see load_credentials).
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path or "config/scraper_config.yaml"
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and environment variables."""

        default_config = {
            "common": {
                "paths": {
                    "output_dir": "data",
                },
                "logging": {
                    "level": "INFO",
                    "file": None,
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                },
                "http_timeout": 30,
            },
            "sources": {
                "yc": {
                    "max_companies": 537,
                    "batch_size": 20,
                    "delays": {"discovery_seconds": 1.0, "batch_seconds": 2.0},
                    "output_filename": "yc_companies_data.json",
                    "jobs_csv_filename": "yc_jobs.csv",
                    "algolia": {
                        "index_name": "WaaSPublicCompanyJob_created_at_desc_production",
                    },
                    "urls": {
                        "login_page": "https://account.ycombinator.com/?continue=https%3A%2F%2Fwww.workatastartup.com%2F",
                        "sign_in": "https://account.ycombinator.com/sign_in",
                        "account_origin": "https://account.ycombinator.com",
                        "portal": "https://www.workatastartup.com/",
                        "portal_origin": "https://www.workatastartup.com",
                        "companies_page": "https://www.workatastartup.com/companies",
                        "companies_fetch": "https://www.workatastartup.com/companies/fetch",
                    },
                },
            },
        }

        # Load from YAML file if it exists
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, "r") as f:
                    yaml_config = yaml.safe_load(f)
                    if yaml_config:
                        _deep_update(default_config, yaml_config)
            except (OSError, yaml.YAMLError) as e:
                print(f"Warning: Could not load config from {self.config_path}: {e}")

        # Override with environment variables
        self._override_from_env(default_config)

        return default_config

    def _override_from_env(self, config: Dict[str, Any]):
        """Override configuration with environment variables."""

        env_mappings = {
            "YC_SCRAPER_MAX_COMPANIES": ("sources", "yc", "max_companies"),
            "YC_SCRAPER_OUTPUT_DIR": ("common", "paths", "output_dir"),
            "YC_SCRAPER_HTTP_TIMEOUT": ("common", "http_timeout"),
            "YC_SCRAPER_LOG_LEVEL": ("common", "logging", "level"),
            "YC_SCRAPER_LOG_FILE": ("common", "logging", "file"),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Navigate to the nested config location
                current = config
                for key in config_path[:-1]:
                    if key not in current:
                        current[key] = {}
                    current = current[key]

                # Set the value, converting types as needed
                key = config_path[-1]
                if key == "max_companies":
                    current[key] = int(env_value)
                elif key == "http_timeout":
                    current[key] = float(env_value)
                else:
                    current[key] = env_value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'sources.yc.batch_size')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def update(self, key: str, value: Any):
        """
        Update configuration value.

        Args:
            key: Configuration key (e.g., 'sources.yc.max_companies')
            value: New value
        """
        keys = key.split(".")
        current = self._config

        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def __str__(self) -> str:
        """String representation of configuration."""
        return f"ScraperConfig(config_path='{self.config_path}')"

    def __repr__(self) -> str:
        """Detailed string representation."""
        return f"ScraperConfig(config_path='{self.config_path}', config={self._config})"


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base (YAML keeps defaults for unset keys)."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base
