"""
Create the triaged Jira issue via REST API v3.

The description is an Atlassian Document Format (ADF) doc. No idempotency
key is sent: two identical calls create two issues.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from .config import JIRA_API_TOKEN, Settings
from .http_client import post_json
from .logs import log_event
from .models import ISSUE_TYPE_BUG, UNASSIGNED_ASSIGNEE, TicketCreationResult, TriageContext
from .secret_store import get_secret

logger = logging.getLogger(__name__)

TRIAGE_CONTEXT_HEADER = "--- Triage Context ---"


class JiraApiError(RuntimeError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Jira API failed to create issue: {status} - {body}")
        self.status = status
        self.body = body


def _paragraph(text: str) -> dict[str, Any]:
    return {"type": "paragraph", "content": [{"type": "text", "text": text}]}


def build_issue_payload(ctx: TriageContext, settings: Settings) -> dict[str, Any]:
    return {
        "fields": {
            "project": {"key": settings.jira_project_key},
            "summary": f"{settings.triage_summary_tag} {ctx.summary}",
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    _paragraph(ctx.description),
                    _paragraph(TRIAGE_CONTEXT_HEADER),
                    _paragraph(f"Component Determined: {ctx.component}"),
                ],
            },
            "issuetype": {"name": ISSUE_TYPE_BUG},
            "priority": {"name": ctx.priority},
            "components": [{"name": ctx.component}],
            "assignee": (
                {"id": ctx.assignee_id} if ctx.assignee_id else {"name": UNASSIGNED_ASSIGNEE}
            ),
        }
    }


def _auth_header(settings: Settings) -> str:
    token = get_secret(JIRA_API_TOKEN, settings)
    if settings.jira_email:
        raw = f"{settings.jira_email}:{token}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")
    return f"Bearer {token}"


def submit_issue(payload: dict[str, Any], settings: Settings) -> str:
    """POST the payload; return the new issue key or raise JiraApiError."""
    resp = post_json(
        f"{settings.jira_base_url}/rest/api/3/issue",
        payload,
        headers={"Authorization": _auth_header(settings)},
        timeout=settings.http_timeout_seconds,
    )
    if not resp.ok:
        raise JiraApiError(resp.status, resp.text)
    issue = resp.json()
    key = issue.get("key") if isinstance(issue, dict) else None
    if not key:
        raise JiraApiError(resp.status, "response has no issue key")
    return str(key)


def create_ticket(payload: dict[str, Any], settings: Settings) -> TicketCreationResult:
    try:
        ctx = TriageContext.from_payload(payload)
        issue_key = submit_issue(build_issue_payload(ctx, settings), settings)
    except Exception as e:
        logger.exception("Jira issue creation failed")
        log_event(logger, "jira_create_failed", error=str(e))
        return TicketCreationResult(
            success=False, message=f"Failed to create Jira ticket: {e}"
        )

    log_event(logger, "jira_create_ok", issueKey=issue_key, component=ctx.component)
    return TicketCreationResult(
        success=True,
        issue_key=issue_key,
        message=(
            f"Jira ticket {issue_key} successfully created and triaged to "
            f"{ctx.component} with priority {ctx.priority}."
        ),
    )
