"""
Minimal JSON-over-HTTP client using stdlib urllib.

Upstream error statuses come back as values; only transport errors raise.
"""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

USER_AGENT = "TriageActions/1.0"
DEFAULT_TIMEOUT = 8


@dataclass(frozen=True)
class HttpResponse:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.text)


def request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: Any = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> HttpResponse:
    hdrs = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    if headers:
        hdrs.update(headers)
    data = None
    if body is not None:
        data = json.dumps(body, ensure_ascii=False).encode("utf-8")
        hdrs.setdefault("Content-Type", "application/json")
    req = urllib.request.Request(url, data=data, headers=hdrs, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
            return HttpResponse(resp.status, resp.read().decode("utf-8"))
    except urllib.error.HTTPError as e:
        error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
        return HttpResponse(e.code, error_body)


def get_json(
    url: str, headers: dict[str, str] | None = None, timeout: int = DEFAULT_TIMEOUT
) -> HttpResponse:
    return request("GET", url, headers=headers, timeout=timeout)


def post_json(
    url: str, body: Any, headers: dict[str, str] | None = None, timeout: int = DEFAULT_TIMEOUT
) -> HttpResponse:
    return request("POST", url, headers=headers, body=body, timeout=timeout)
