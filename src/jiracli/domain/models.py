"""Domain models and value objects for worklog reports."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple, Union


class Period(str, Enum):
    """Aggregation granularity of a worklog report."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Period":
        """Map a keyword to a period, falling back to daily."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.DAILY


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days with start/end-of-day boundaries."""

    start: datetime
    end: datetime

    def days(self) -> Iterator[date]:
        """Yield every calendar day from start to end, inclusive."""
        current = self.start.date()
        last = self.end.date()
        while current <= last:
            yield current
            current += timedelta(days=1)


@dataclass
class IssueTime:
    """Time one issue accumulated on one day."""

    seconds: int = 0
    summary: str = ""


@dataclass
class ScalarDay:
    """Day total without issue breakdown."""

    seconds: int = 0

    @property
    def issues(self) -> Dict[str, IssueTime]:
        return {}

    def add(self, issue_key: str, summary: str, seconds: int) -> None:
        self.seconds += seconds


@dataclass
class DetailedDay:
    """Day entry broken down by issue key."""

    issues: Dict[str, IssueTime] = field(default_factory=dict)

    @property
    def seconds(self) -> int:
        return sum(item.seconds for item in self.issues.values())

    def add(self, issue_key: str, summary: str, seconds: int) -> None:
        # First summary seen for an issue wins
        bucket = self.issues.get(issue_key)
        if bucket is None:
            bucket = IssueTime(summary=summary)
            self.issues[issue_key] = bucket
        bucket.seconds += seconds


DayEntry = Union[ScalarDay, DetailedDay]


@dataclass
class DailyAggregate:
    """Worklog time per day, keyed by ``YYYY-MM-DD``."""

    detailed: bool = False
    days: Dict[str, DayEntry] = field(default_factory=dict)

    @classmethod
    def seeded(cls, date_range: DateRange, detailed: bool) -> "DailyAggregate":
        """Create an aggregate holding an empty entry for every day in range.

        Args:
            date_range: Range whose days are seeded
            detailed: Whether days carry a per-issue breakdown

        Returns:
            Zero-filled aggregate
        """
        aggregate = cls(detailed=detailed)
        for day in date_range.days():
            aggregate.days[day.isoformat()] = aggregate.new_entry()
        return aggregate

    @classmethod
    def from_seconds(cls, totals: Dict[str, int]) -> "DailyAggregate":
        """Build a non-detailed aggregate from a date -> seconds mapping."""
        return cls(
            detailed=False,
            days={day: ScalarDay(seconds) for day, seconds in totals.items()},
        )

    @classmethod
    def from_issues(
        cls, breakdown: Dict[str, Dict[str, Tuple[int, str]]]
    ) -> "DailyAggregate":
        """Build a detailed aggregate from date -> {key: (seconds, summary)}."""
        days: Dict[str, DayEntry] = {}
        for day, issues in breakdown.items():
            entry = DetailedDay()
            for issue_key, (seconds, summary) in issues.items():
                entry.add(issue_key, summary, seconds)
            days[day] = entry
        return cls(detailed=True, days=days)

    def new_entry(self) -> DayEntry:
        return DetailedDay() if self.detailed else ScalarDay()

    def add(self, day: str, issue_key: str, summary: str, seconds: int) -> bool:
        """Add logged time to a day already present in the aggregate.

        Returns:
            False if the day is outside the aggregate, True otherwise
        """
        entry = self.days.get(day)
        if entry is None:
            return False
        entry.add(issue_key, summary, seconds)
        return True

    def total_seconds(self) -> int:
        return sum(entry.seconds for entry in self.days.values())

    def __contains__(self, day: object) -> bool:
        return day in self.days

    def __len__(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class ReportTable:
    """Table of preformatted cells; ``footer`` is rendered after a separator."""

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    title: Optional[str] = None
    footer: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class ReportBlock:
    """One section of a report: optional heading plus a table or a notice."""

    heading: Optional[str] = None
    table: Optional[ReportTable] = None
    notice: Optional[str] = None


@dataclass(frozen=True)
class RenderedReport:
    """Report sections and the total they cover, in seconds."""

    blocks: Tuple[ReportBlock, ...]
    total_seconds: int

    @classmethod
    def empty(cls, notice: str) -> "RenderedReport":
        """Create a report that only carries a notice."""
        return cls(blocks=(ReportBlock(notice=notice),), total_seconds=0)
