"""
Tests for the command-line entry point.
"""

import json
from unittest.mock import patch

import pytest

from src.scraper.errors import AuthError
from src.scripts import run_scraper

CREDS_ENV = {
    "YC_USERNAME": "founder@example.com",
    "YC_PASSWORD": "hunter2",
    "ALGOLIA_APP_ID": "APP",
    "ALGOLIA_API_KEY": "key",
}


@pytest.fixture
def env(monkeypatch):
    for name, value in CREDS_ENV.items():
        monkeypatch.setenv(name, value)
    # Keep any developer .env out of the run
    monkeypatch.setattr("src.scraper.config.load_dotenv", lambda: None)


@pytest.fixture
def config_arg(tmp_path):
    return ["--config", str(tmp_path / "config" / "scraper_config.yaml")]


def test_main_writes_output(env, config_arg, tmp_path):
    out = tmp_path / "result.json"
    records = [{"name": "Acme", "website": "", "founders": [], "jobs": [{"name": "Engineer"}]}]

    with patch.object(run_scraper.YCDataExtractor, "extract_data", return_value=records) as extract:
        code = run_scraper.main(config_arg + ["--max-companies", "3", "--output", str(out)])

    assert code == 0
    extract.assert_called_once_with(3)
    assert json.loads(out.read_text()) == records


def test_main_writes_jobs_csv_when_asked(env, config_arg, tmp_path):
    out = tmp_path / "result.json"
    csv_path = tmp_path / "jobs.csv"
    records = [{"name": "Acme", "website": "", "founders": [], "jobs": [{"name": "Engineer"}]}]

    with patch.object(run_scraper.YCDataExtractor, "extract_data", return_value=records):
        code = run_scraper.main(
            config_arg + ["--output", str(out), "--jobs-csv", str(csv_path)]
        )

    assert code == 0
    assert csv_path.exists()


def test_main_fails_fast_without_credentials(monkeypatch, config_arg, tmp_path):
    for name in CREDS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("src.scraper.config.load_dotenv", lambda: None)

    with patch.object(run_scraper, "YCDataExtractor") as extractor_cls:
        code = run_scraper.main(config_arg + ["--output", str(tmp_path / "x.json")])

    assert code == 1
    extractor_cls.assert_not_called()


def test_main_writes_nothing_on_failure(env, config_arg, tmp_path):
    out = tmp_path / "result.json"

    with patch.object(
        run_scraper.YCDataExtractor, "extract_data", side_effect=AuthError("login rejected")
    ):
        code = run_scraper.main(config_arg + ["--output", str(out)])

    assert code == 1
    assert not out.exists()


def test_default_run_writes_only_the_json_file(env, config_arg, tmp_path):
    out = tmp_path / "data" / "yc_companies_data.json"
    records = [{"name": "Acme", "website": "", "founders": [], "jobs": [{"name": "Engineer"}]}]

    with patch.object(run_scraper.YCDataExtractor, "extract_data", return_value=records):
        code = run_scraper.main(config_arg + ["--output", str(out)])

    assert code == 0
    written = sorted(p.relative_to(tmp_path) for p in tmp_path.rglob("*") if p.is_file())
    assert [str(p) for p in written] == [str(out.relative_to(tmp_path))]


def test_company_count_comes_from_config_without_flag(env, tmp_path):
    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    cfg_file = cfg_dir / "scraper_config.yaml"
    cfg_file.write_text("sources:\n  yc:\n    max_companies: 12\n")

    with patch.object(run_scraper.YCDataExtractor, "extract_data", return_value=[]) as extract:
        code = run_scraper.main(["--config", str(cfg_file), "--output", str(tmp_path / "o.json")])

    assert code == 0
    extract.assert_called_once_with(12)
