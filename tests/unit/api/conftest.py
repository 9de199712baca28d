"""API unit test fixtures."""

from __future__ import annotations

import pytest

from recyclehub.database.repositories.status import StatusRecord


pytestmark = pytest.mark.unit


@pytest.fixture
def sample_statuses() -> list[StatusRecord]:
    """Create active order statuses in display order."""
    return [
        StatusRecord(name="pending", label="Pending", display_order=1, is_default=True),
        StatusRecord(name="device_received", label="Device Received", display_order=2),
        StatusRecord(name="inspected", label="Inspected", display_order=3),
        StatusRecord(name="paid", label="Paid", color="#16A34A", display_order=4),
    ]
