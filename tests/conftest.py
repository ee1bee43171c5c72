import json
import logging

import pytest


@pytest.fixture
def events(caplog):
    """Return a callable listing the JSON log records emitted so far."""
    caplog.set_level(logging.INFO)

    def _events():
        out = []
        for r in caplog.records:
            try:
                out.append(json.loads(r.getMessage()))
            except ValueError:
                continue
        return out

    return _events
