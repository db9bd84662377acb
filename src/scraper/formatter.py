"""
Map raw portal company records to the reduced output shape.

Optional fields that are absent in the source stay absent in the output
(no key), which keeps them out of the JSON file as well.
"""

from typing import Any, Dict, List

JOB_LABEL_FIELDS = (
    "pretty_min_experience",
    "pretty_job_type",
    "pretty_role",
    "pretty_salary_range",
)


def format_job(job: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {"name": job.get("title") or ""}
    for field in JOB_LABEL_FIELDS:
        if field in job:
            out[field] = job[field]
    return out


def format_company(company: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "name": company.get("name") or "",
        "website": company.get("website") or "",
    }
    if "team_size" in company:
        out["team_size"] = company["team_size"]
    out["founders"] = company.get("founders") or []
    for field in ("primary_vertical", "website_display", "country"):
        if field in company:
            out[field] = company[field]
    out["jobs"] = [format_job(job) for job in (company.get("jobs") or [])]
    return out


def format_companies(companies: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Format fetched companies, preserving their order."""
    return [format_company(c) for c in companies]


def count_jobs(formatted: List[Dict[str, Any]]) -> int:
    return sum(len(c.get("jobs") or []) for c in formatted)
