"""
Named secret lookup: environment first, then AWS Secrets Manager.

Resolved on every call; nothing is cached between invocations.
"""

from __future__ import annotations

import importlib
import json
import os

from .config import Settings


class SecretNotFoundError(KeyError):
    pass


def _boto3():
    # Allow tests to monkeypatch module-level `boto3` symbol.
    return globals().get("boto3") or importlib.import_module("boto3")


def get_secret(name: str, settings: Settings) -> str:
    """Return secret `name`, or raise SecretNotFoundError."""
    val = os.getenv(name)
    if val:
        return val
    if not settings.secrets_name:
        raise SecretNotFoundError(name)
    sm = _boto3().client("secretsmanager")
    resp = sm.get_secret_value(SecretId=settings.secrets_name)
    data = json.loads(resp.get("SecretString") or "{}")
    val = data.get(name) if isinstance(data, dict) else None
    if not val:
        raise SecretNotFoundError(name)
    return str(val)
