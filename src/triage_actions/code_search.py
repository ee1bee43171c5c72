"""
Code search -> owning component/team.

The first search hit's file path is matched against COMPONENT_RULES in order;
the first rule whose substring occurs in the path wins.
"""

from __future__ import annotations

import logging
import urllib.parse
from collections.abc import Iterable
from typing import Any

from .config import BITBUCKET_API_TOKEN, Settings
from .http_client import get_json
from .logs import log_event
from .models import NO_PATH_FOUND, TRIAGE_TEAM, UNASSIGNED_COMPONENT, CodeSearchResult
from .secret_store import get_secret

logger = logging.getLogger(__name__)

# (substring, component, team)
COMPONENT_RULES: tuple[tuple[str, str, str], ...] = (
    ("auth", "Authentication", "Team-Ares"),
    ("billing", "Billing/Payments", "Team-Zeus"),
)

FAILURE_RESULT = CodeSearchResult()


def match_component(
    path: str, rules: Iterable[tuple[str, str, str]] = COMPONENT_RULES
) -> tuple[str, str]:
    for needle, component, team in rules:
        if needle in path:
            return component, team
    return UNASSIGNED_COMPONENT, TRIAGE_TEAM


def first_match_path(data: Any) -> str | None:
    """Null-safe `values[0].file.path`."""
    if not isinstance(data, dict):
        return None
    values = data.get("values")
    if not isinstance(values, list) or not values:
        return None
    first = values[0] if isinstance(values[0], dict) else {}
    file_obj = first.get("file")
    path = file_obj.get("path") if isinstance(file_obj, dict) else None
    return path if isinstance(path, str) and path else None


def search_url(keywords: str, settings: Settings) -> str:
    return (
        f"{settings.code_search_base_url}/repositories/"
        f"{settings.code_search_workspace}/{settings.code_search_repo_slug}"
        f"/search/code?q={urllib.parse.quote(keywords, safe='')}"
    )


def search_codebase(keywords: str | None, settings: Settings) -> CodeSearchResult:
    if not keywords:
        log_event(logger, "code_search_skipped", reason="missing_keywords")
        return FAILURE_RESULT

    try:
        token = get_secret(BITBUCKET_API_TOKEN, settings)
        resp = get_json(
            search_url(keywords, settings),
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.http_timeout_seconds,
        )
        if not resp.ok:
            log_event(logger, "code_search_failed_status", status=resp.status)
            return FAILURE_RESULT
        data = resp.json()
    except Exception as e:
        logger.exception("Code search failed")
        log_event(logger, "code_search_error", error=str(e))
        return FAILURE_RESULT

    path = first_match_path(data)
    if not path:
        return CodeSearchResult(path=NO_PATH_FOUND)
    component, team = match_component(path)
    return CodeSearchResult(component=component, team=team, path=path)
