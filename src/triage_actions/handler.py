"""
AWS Lambda entry points for the triage agent's actions.

Each handler takes an orchestrator event `{"payload": {...}}` and returns the
plain result dict. Events arriving through a Function URL (JSON `body`, no
`payload`) get the result wrapped as an HTTP response instead.
"""

from __future__ import annotations

import base64
import json
import logging
import time
from collections.abc import Callable
from typing import Any

from . import code_search, crm, jira
from .config import Settings, load_settings
from .logs import configure_logging, log_event
from .models import TicketCreationResult

logger = logging.getLogger(__name__)


def _rid(context: Any) -> str | None:
    return getattr(context, "aws_request_id", None)


def _response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _decode_body(event: dict[str, Any]) -> dict[str, Any]:
    """Function URL body as a dict; anything undecodable becomes {}."""
    raw = event.get("body")
    if isinstance(raw, dict):
        return raw
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw or b"", validate=True)
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        data = json.loads(raw or "{}")
    except (ValueError, TypeError):
        # binascii.Error, UnicodeDecodeError and JSONDecodeError are ValueErrors
        return {}
    return data if isinstance(data, dict) else {}


def _extract_payload(event: Any) -> tuple[dict[str, Any], bool]:
    """Return (payload, via_http)."""
    if not isinstance(event, dict):
        return {}, False
    payload = event.get("payload")
    if isinstance(payload, dict):
        return payload, False
    if "body" in event:
        body = _decode_body(event)
        inner = body.get("payload")
        return (inner if isinstance(inner, dict) else body), True
    return {}, False


def _run(
    action: str,
    event: Any,
    context: Any,
    call: Callable[[dict[str, Any], Settings], dict[str, Any]],
    fallback: Callable[[Exception], dict[str, Any]],
) -> dict[str, Any]:
    configure_logging()
    start_ts = time.time()
    payload, via_http = _extract_payload(event)
    try:
        result = call(payload, load_settings())
    except Exception as e:
        # e.g. a malformed HTTP_TIMEOUT_SECONDS; the caller still gets a result
        logger.exception("%s failed", action)
        log_event(logger, f"{action}_error", rid=_rid(context), error=str(e))
        result = fallback(e)
    log_event(
        logger,
        f"{action}_done",
        rid=_rid(context),
        ms=int((time.time() - start_ts) * 1000),
        **{k: v for k, v in result.items() if k != "message"},
    )
    return _response(200, result) if via_http else result


def get_user_details(event: Any, context: Any) -> dict[str, Any]:
    return _run(
        "get_user_details",
        event,
        context,
        lambda p, s: crm.lookup_user_tier(p.get("user_id"), s).to_dict(),
        lambda _e: crm.DEFAULT_RESULT.to_dict(),
    )


def search_codebase(event: Any, context: Any) -> dict[str, Any]:
    return _run(
        "search_codebase",
        event,
        context,
        lambda p, s: code_search.search_codebase(p.get("keywords"), s).to_dict(),
        lambda _e: code_search.FAILURE_RESULT.to_dict(),
    )


def create_jira_ticket(event: Any, context: Any) -> dict[str, Any]:
    return _run(
        "create_jira_ticket",
        event,
        context,
        lambda p, s: jira.create_ticket(p, s).to_dict(),
        lambda e: TicketCreationResult(
            success=False, message=f"Failed to create Jira ticket: {e}"
        ).to_dict(),
    )
