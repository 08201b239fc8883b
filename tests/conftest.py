"""Shared fixtures built on the baseline payload in helpers.py."""

from typing import Any

import pytest
from helpers import base_payload

from src.signage.models import ContentSourceSnapshot


@pytest.fixture
def payload() -> dict[str, Any]:
    return base_payload()


@pytest.fixture
def make_snapshot(payload):
    """Build a snapshot from the baseline payload with top-level overrides."""

    def _make(**overrides: Any) -> ContentSourceSnapshot:
        data = {**payload, **overrides}
        return ContentSourceSnapshot.model_validate(data)

    return _make
