"""
Reporter support-tier lookup against the CRM users endpoint.
"""

from __future__ import annotations

import logging
import urllib.parse

from .config import CRM_API_KEY, Settings
from .http_client import get_json
from .logs import log_event
from .models import DEFAULT_TIER, ENTERPRISE_TIER, PriorityModifier, UserTierResult
from .secret_store import get_secret

logger = logging.getLogger(__name__)

DEFAULT_RESULT = UserTierResult()


def tier_from_user(data: dict) -> UserTierResult:
    level = data.get("subscription_level")
    modifier = (
        PriorityModifier.P1_CRITICAL if level == ENTERPRISE_TIER else PriorityModifier.P3_NEUTRAL
    )
    tier = level if isinstance(level, str) and level else DEFAULT_TIER
    return UserTierResult(tier=tier, priority_modifier=modifier)


def lookup_user_tier(user_id: str | None, settings: Settings) -> UserTierResult:
    """Return the user's tier; any failure degrades to the Standard/P3 default."""
    if not user_id:
        log_event(logger, "crm_lookup_skipped", reason="missing_user_id")
        return DEFAULT_RESULT

    url = f"{settings.crm_base_url}/users/{urllib.parse.quote(str(user_id), safe='')}"
    try:
        token = get_secret(CRM_API_KEY, settings)
        resp = get_json(
            url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.http_timeout_seconds,
        )
        if not resp.ok:
            log_event(logger, "crm_lookup_failed_status", userId=user_id, status=resp.status)
            return DEFAULT_RESULT
        data = resp.json()
    except Exception as e:
        logger.exception("CRM lookup failed")
        log_event(logger, "crm_lookup_error", userId=user_id, error=str(e))
        return DEFAULT_RESULT

    return tier_from_user(data if isinstance(data, dict) else {})
