"""
Calendar grid builder.

Turns a reference month and a set of workouts into a render-ready
month grid, and provides the day and week boundary helpers shared
with the workout store. All boundaries are computed in the timezone
and first weekday of an injected CalendarConfig, never the host's.
"""

import calendar
import logging
from collections import Counter
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from .config import CalendarConfig
from .models import CalendarCell, MonthGrid, Workout


logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

# single-letter headers indexed by python weekday (0 = Monday)
WEEKDAY_LETTERS = ["M", "T", "W", "T", "F", "S", "S"]


def to_local(value: DateLike, tz: ZoneInfo) -> datetime:
    """
    Convert a date or datetime into an aware datetime in tz.

    Naive datetimes are taken to already be local wall time; plain
    dates become local midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)
    return datetime.combine(value, time(), tzinfo=tz)


def local_day(value: DateLike, tz: ZoneInfo) -> date:
    """Calendar day that value falls on in tz."""
    if isinstance(value, datetime):
        return to_local(value, tz).date()
    return value


def day_bounds(day: DateLike, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """
    Half-open interval [start of day, start of next day) in tz.

    The end is the next local midnight, so DST days are 23 or 25 hours long.
    """
    day = local_day(day, tz)
    start = datetime.combine(day, time(), tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time(), tzinfo=tz)
    return start, end


def days_in_month(year: int, month: int) -> int:
    """Number of days in the month, leap-year aware."""
    return calendar.monthrange(year, month)[1]


def count_by_day(workouts: Iterable[Workout], tz: ZoneInfo) -> Counter:
    """Count workouts per local calendar day."""
    return Counter(local_day(w.date, tz) for w in workouts)


class CalendarGridBuilder:
    """Builds month grids and weekly totals for a fixed calendar config."""

    def __init__(self, config: Optional[CalendarConfig] = None):
        self._config = config or CalendarConfig()

    @property
    def timezone(self) -> ZoneInfo:
        return self._config.timezone

    @property
    def first_weekday(self) -> int:
        return self._config.first_weekday

    def today(self) -> date:
        """Current date in the configured timezone."""
        return datetime.now(self.timezone).date()

    def first_of_month(self, reference_date: DateLike) -> date:
        """First day of the month containing reference_date."""
        return local_day(reference_date, self.timezone).replace(day=1)

    def weekday_offset(self, day: date) -> int:
        """Column of day in a week starting on the configured first weekday."""
        return (day.weekday() - self.first_weekday) % 7

    def build_month_grid(
        self, reference_date: DateLike, all_workouts: Iterable[Workout]
    ) -> List[CalendarCell]:
        """
        Build the cells for the month containing reference_date.

        Parameters:
            reference_date: Any date or datetime within the month.
            all_workouts: Workouts to aggregate; only those in the month count.

        Returns:
            Leading placeholder cells followed by one cell per day,
            or an empty list if the month cannot be decomposed.
        """
        try:
            first = self.first_of_month(reference_date)
            offset = self.weekday_offset(first)
            num_days = days_in_month(first.year, first.month)
        except (ValueError, OverflowError) as e:
            logger.error(f"Could not build month grid for {reference_date!r}: {e}")
            return []

        counts = count_by_day(all_workouts, self.timezone)

        cells = [CalendarCell(date=None) for _ in range(offset)]
        for day_number in range(1, num_days + 1):
            day = first.replace(day=day_number)
            cells.append(CalendarCell(date=day, workout_count=counts.get(day, 0)))

        return cells

    def shift_month(self, reference_date: DateLike, delta_months: int) -> DateLike:
        """
        Add whole months to reference_date.

        The day of month is clamped to the length of the target month,
        so Jan 31 + 1 month is the last day of February. Results are
        clamped to the months a date can represent (years 1 to 9999).
        """
        month_index = reference_date.year * 12 + (reference_date.month - 1) + delta_months
        month_index = max(MINYEAR * 12, min(month_index, MAXYEAR * 12 + 11))
        year, month = divmod(month_index, 12)
        month += 1
        day = min(reference_date.day, days_in_month(year, month))
        return reference_date.replace(year=year, month=month, day=day)

    def week_bounds(self, today: Optional[DateLike] = None) -> Tuple[date, date]:
        """First and last day of the week containing today."""
        day = self.today() if today is None else local_day(today, self.timezone)
        start = day - timedelta(days=self.weekday_offset(day))
        return start, start + timedelta(days=6)

    def count_workouts_in_current_week(
        self, all_workouts: Iterable[Workout], today: Optional[DateLike] = None
    ) -> int:
        """
        Count workouts in the calendar week containing today.

        The window covers all seven days of the week, including the
        whole of its last day.
        """
        start, end = self.week_bounds(today)
        return sum(
            1 for w in all_workouts if start <= local_day(w.date, self.timezone) <= end
        )

    def weekday_headers(self) -> List[str]:
        """Single-letter weekday headers starting at the first weekday."""
        return [WEEKDAY_LETTERS[(self.first_weekday + i) % 7] for i in range(7)]

    def month_title(self, reference_date: DateLike) -> str:
        """Month heading such as 'March 2024'."""
        first = self.first_of_month(reference_date)
        return f"{calendar.month_name[first.month]} {first.year}"

    def build(
        self,
        reference_date: DateLike,
        all_workouts: Iterable[Workout],
        today: Optional[DateLike] = None,
    ) -> MonthGrid:
        """Build the full month view: cells, headers, title and weekly count."""
        workouts = list(all_workouts)
        return MonthGrid(
            month=self.first_of_month(reference_date),
            title=self.month_title(reference_date),
            weekday_headers=self.weekday_headers(),
            cells=self.build_month_grid(reference_date, workouts),
            weekly_count=self.count_workouts_in_current_week(workouts, today),
        )
