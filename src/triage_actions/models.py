"""
Result types returned to the orchestrator, plus their fallback constants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_TIER = "Standard"
ENTERPRISE_TIER = "Enterprise"

UNASSIGNED_COMPONENT = "Unassigned"
TRIAGE_TEAM = "Triage_Team"
NO_PATH_FOUND = "No path found"

ISSUE_TYPE_BUG = "Bug"
UNASSIGNED_ASSIGNEE = "unassigned"

REQUIRED_FIELDS = ("summary", "description", "priority", "component")


class PriorityModifier(str, Enum):
    P1_CRITICAL = "P1_Critical"
    P3_NEUTRAL = "P3_Neutral"


@dataclass(frozen=True)
class UserTierResult:
    tier: str = DEFAULT_TIER
    priority_modifier: PriorityModifier = PriorityModifier.P3_NEUTRAL

    def to_dict(self) -> dict[str, Any]:
        return {"tier": self.tier, "priority_modifier": self.priority_modifier.value}


@dataclass(frozen=True)
class CodeSearchResult:
    component: str = UNASSIGNED_COMPONENT
    team: str = TRIAGE_TEAM
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"component": self.component, "team": self.team, "path": self.path}


@dataclass(frozen=True)
class TicketCreationResult:
    success: bool
    message: str
    issue_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "issue_key": self.issue_key, "message": self.message}


@dataclass(frozen=True)
class TriageContext:
    summary: str
    description: str
    priority: str
    component: str
    assignee_id: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TriageContext":
        """Build from an action payload; raise ValueError on a missing or non-text field."""
        missing = [k for k in REQUIRED_FIELDS if payload.get(k) in (None, "")]
        if missing:
            raise ValueError(f"missing required field(s): {', '.join(missing)}")
        not_text = [k for k in REQUIRED_FIELDS if not isinstance(payload[k], str)]
        if not_text:
            raise ValueError(f"field(s) must be strings: {', '.join(not_text)}")
        assignee = payload.get("assignee_id")
        return cls(
            summary=payload["summary"],
            description=payload["description"],
            priority=payload["priority"],
            component=payload["component"],
            assignee_id=str(assignee) if assignee else None,
        )
