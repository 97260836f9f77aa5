"""Shared test helpers for ghdep_core tests."""

from datetime import datetime, timedelta, timezone

import pytest

from ghdep_core.units import ReviewUnit

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_unit():
    """Factory for ReviewUnit with sensible defaults.

    ``age_hours`` shifts updated_at forward from BASE_TIME so tests can
    control ordering.
    """
    def _make(number: int | str = 1, title: str = "Bump lodash from 1.0.0 to 1.0.1",
              repository: str = "acme/web", age_hours: int = 0) -> ReviewUnit:
        return ReviewUnit(
            repository=repository,
            number=str(number),
            title=title,
            url=f"https://github.com/{repository}/pull/{number}",
            updated_at=BASE_TIME + timedelta(hours=age_hours),
        )
    return _make
