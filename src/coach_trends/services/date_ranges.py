"""Resolve relative period selectors into calendar-day ranges."""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from coach_trends.domain.series import DateRange, PeriodSelector, TrendValidationError

Clock = Callable[[], datetime]

# "all" is capped at one year.
PERIOD_DAYS: dict[PeriodSelector, int] = {
    PeriodSelector.TODAY: 1,
    PeriodSelector.LAST_7: 7,
    PeriodSelector.LAST_30: 30,
    PeriodSelector.LAST_90: 90,
    PeriodSelector.LAST_YEAR: 365,
    PeriodSelector.ALL: 365,
}


def system_clock() -> datetime:
    """Return the current UTC instant."""
    return datetime.now(tz=UTC)


def parse_period_selector(raw: str | PeriodSelector) -> PeriodSelector:
    """Parse a selector string, rejecting anything outside the enumeration."""
    if isinstance(raw, PeriodSelector):
        return raw
    try:
        return PeriodSelector(raw)
    except ValueError:
        raise TrendValidationError(f"Unknown period selector: {raw!r}") from None


def local_date(instant: datetime, tz: ZoneInfo) -> date:
    """Return the calendar date of an instant in the reference timezone.

    Naive datetimes are taken to already be in the reference timezone.
    """
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


def resolve_date_range(
    selector: str | PeriodSelector, now: datetime, tz: ZoneInfo
) -> DateRange:
    """Return the inclusive range ending on the local date of ``now``."""
    period = parse_period_selector(selector)
    end = local_date(now, tz)
    start = end - timedelta(days=PERIOD_DAYS[period] - 1)
    return DateRange(start=start, end=end)
