"""
Bug-triage action handlers (AWS Lambda).

Where: AWS Lambda, invoked by an agent orchestrator (or a Function URL).
What:  Look up a reporter's support tier, map a code search hit to an owning
       team, and create the triaged Jira issue.
Why:   Give the triage agent three small, side-effect-isolated actions.
"""

__all__ = [
    "config",
    "handler",
    "http_client",
    "secret_store",
    "logs",
    "models",
    "crm",
    "code_search",
    "jira",
]
