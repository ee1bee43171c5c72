"""
Configuration helpers and defaults.

Centralize endpoints and tunables to avoid magic strings in code/tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

CRM_API_KEY = "CRM_API_KEY"
BITBUCKET_API_TOKEN = "BITBUCKET_API_TOKEN"
JIRA_API_TOKEN = "JIRA_API_TOKEN"


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


@dataclass(frozen=True)
class Settings:
    crm_base_url: str
    code_search_base_url: str
    code_search_workspace: str
    code_search_repo_slug: str
    jira_base_url: str
    jira_project_key: str
    jira_email: str | None
    triage_summary_tag: str
    secrets_name: str | None
    http_timeout_seconds: int


def load_settings() -> Settings:
    """Load settings from environment with safe defaults for local tests."""

    return Settings(
        crm_base_url=(_env("CRM_BASE_URL") or "https://api.your-crm.com").rstrip("/"),
        code_search_base_url=(
            _env("CODE_SEARCH_BASE_URL") or "https://api.bitbucket.org/2.0"
        ).rstrip("/"),
        code_search_workspace=_env("CODE_SEARCH_WORKSPACE") or "your-workspace",
        code_search_repo_slug=_env("CODE_SEARCH_REPO_SLUG") or "sobta-core-repo",
        jira_base_url=(_env("JIRA_BASE_URL") or "https://example.atlassian.net").rstrip("/"),
        jira_project_key=_env("JIRA_PROJECT_KEY") or "PROJ",
        jira_email=_env("JIRA_EMAIL") or None,
        triage_summary_tag=_env("TRIAGE_SUMMARY_TAG", "[SOBTA Triage]") or "[SOBTA Triage]",
        secrets_name=_env("SECRETS_NAME") or None,
        http_timeout_seconds=int(_env("HTTP_TIMEOUT_SECONDS", "8") or 8),
    )
