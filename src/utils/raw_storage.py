"""
Output writers for formatted company records.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

JOB_COLUMNS = [
    "company",
    "website",
    "country",
    "primary_vertical",
    "team_size",
    "job",
    "pretty_min_experience",
    "pretty_job_type",
    "pretty_role",
    "pretty_salary_range",
]


def save_companies_json(companies: List[Dict[str, Any]], path: Path) -> Path:
    """Write the records as a pretty-printed JSON array, replacing any previous file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(companies, f, ensure_ascii=False, indent=2)
    return path


def flatten_jobs(companies: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per job, carrying the owning company's columns."""
    rows: List[Dict[str, Any]] = []
    for c in companies:
        for job in c.get("jobs") or []:
            rows.append(
                {
                    "company": c.get("name", ""),
                    "website": c.get("website", ""),
                    "country": c.get("country"),
                    "primary_vertical": c.get("primary_vertical"),
                    "team_size": c.get("team_size"),
                    "job": job.get("name", ""),
                    "pretty_min_experience": job.get("pretty_min_experience"),
                    "pretty_job_type": job.get("pretty_job_type"),
                    "pretty_role": job.get("pretty_role"),
                    "pretty_salary_range": job.get("pretty_salary_range"),
                }
            )
    return pd.DataFrame(rows, columns=JOB_COLUMNS)


def save_jobs_csv(companies: List[Dict[str, Any]], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    flatten_jobs(companies).to_csv(path, index=False)
    return path
