"""Derive the calendar timeline and usable week count from a test date."""
import logging
from datetime import date, datetime
from typing import Optional

from app.models.plan import Timeline
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig

logger = logging.getLogger(__name__)


def calculate_timeline(
    test_date: date | datetime,
    today: Optional[date | datetime] = None,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> Timeline:
    """
    Build the plan timeline.

    Both dates are normalized to midnight, so the day count is a whole number.
    The final calendar week is held back as a rest buffer; effective weeks never
    drop below 1, even for a test date less than a week away.

    Args:
        test_date: Day of the test
        today: Plan start day (defaults to the local current date)
        config: Planning tables (rest buffer size)
    """
    start = _as_date(today) if today is not None else date.today()
    test_day = _as_date(test_date)

    total_days = (test_day - start).days
    total_weeks = total_days // 7
    effective_weeks = max(1, total_weeks - config.rest_buffer_weeks)

    logger.debug(
        "Timeline %s -> %s: %d days, %d weeks, %d effective",
        start, test_day, total_days, total_weeks, effective_weeks,
    )
    return Timeline(
        start_date=start,
        test_date=test_day,
        total_days=total_days,
        total_weeks=total_weeks,
        effective_weeks=effective_weeks,
    )


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
