"""Writing activity over time: timeline buckets, peaks, streaks, tag trends."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Iterable

from ..models import NoteRecord
from .stats import extract_tags
from .timeutil import as_aware, local_now

TIMESPANS = ("1w", "1m", "3m", "6m", "1y", "all")
GRANULARITIES = ("day", "week", "month", "quarter")
DEFAULT_TIMESPAN = "1y"
DEFAULT_GRANULARITY = "month"

MAX_STREAK_DAYS = 365

# months to step back for each month-based timespan
_MONTH_SPANS = {"1m": 1, "3m": 3, "6m": 6, "1y": 12}


@dataclass(frozen=True)
class TimelinePoint:
    period: str
    count: int


@dataclass(frozen=True)
class TagTrend:
    count: int
    growth_rate: float  # share of in-range files carrying the tag, in percent


@dataclass
class TrendsAnalysis:
    start_date: datetime | None = None
    end_date: datetime | None = None
    total_duration: str = ""
    total_files_created: int = 0
    peak_period: str = ""
    peak_files: int = 0
    granularity: str = DEFAULT_GRANULARITY
    avg_files_per_period: float = 0.0
    growth_rate: float = 0.0
    most_active_day: str = ""
    most_active_month: str = ""
    writing_streak: int = 0
    active_days: int = 0
    total_days: int = 0
    activity_percentage: float = 0.0
    timeline: list[TimelinePoint] = field(default_factory=list)
    tag_trends: dict[str, TagTrend] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "total_duration": self.total_duration,
            "total_files_created": self.total_files_created,
            "peak_period": self.peak_period,
            "peak_files": self.peak_files,
            "granularity": self.granularity,
            "avg_files_per_period": self.avg_files_per_period,
            "growth_rate": self.growth_rate,
            "most_active_day": self.most_active_day,
            "most_active_month": self.most_active_month,
            "writing_streak": self.writing_streak,
            "active_days": self.active_days,
            "total_days": self.total_days,
            "activity_percentage": self.activity_percentage,
            "timeline": [{"period": p.period, "count": p.count} for p in self.timeline],
            "tag_trends": {
                tag: {"count": t.count, "growth_rate": t.growth_rate} for tag, t in self.tag_trends.items()
            },
        }


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months; an overflowing day rolls into the next month.

    2024-03-31 minus one month is 2024-03-02, not 2024-02-29.
    """
    years, month_index = divmod(moment.month - 1 + months, 12)
    first = moment.replace(year=moment.year + years, month=month_index + 1, day=1)
    return first + timedelta(days=moment.day - 1)


def timespan_start(timespan: str, now: datetime) -> datetime:
    """Start of the window for a timespan keyword; unknown keywords mean one year."""
    if timespan == "1w":
        return now - timedelta(days=7)
    if timespan == "all":
        return datetime(1, 1, 1, tzinfo=now.tzinfo)
    return add_months(now, -_MONTH_SPANS.get(timespan, 12))


def format_period(moment: datetime, granularity: str) -> str:
    if granularity == "day":
        return moment.strftime("%Y-%m-%d")
    if granularity == "week":
        year, week, _ = moment.isocalendar()
        return "%d-W%02d" % (year, week)
    if granularity == "quarter":
        return "%d-Q%d" % (moment.year, (moment.month - 1) // 3 + 1)
    return moment.strftime("%Y-%m")


def most_active(activity: Counter[str]) -> tuple[str, int]:
    """Key with the highest count; ties go to the smallest key."""
    if not activity:
        return "", 0
    key, count = min(activity.items(), key=lambda kv: (-kv[1], kv[0]))
    return key, count


def writing_streak(day_activity: Counter[str], now: datetime) -> int:
    """Consecutive active days ending today, looking back at most a year."""
    streak = 0
    current = now
    for _ in range(MAX_STREAK_DAYS):
        if day_activity.get(current.strftime("%Y-%m-%d"), 0) <= 0:
            break
        streak += 1
        current -= timedelta(days=1)
    return streak


def analyze_trends(
    notes: Iterable[NoteRecord],
    timespan: str = DEFAULT_TIMESPAN,
    granularity: str = DEFAULT_GRANULARITY,
    now: datetime | None = None,
) -> TrendsAnalysis:
    """Activity of notes modified in ``[start, now)`` for the given timespan."""
    if granularity not in GRANULARITIES:
        granularity = DEFAULT_GRANULARITY
    if timespan not in TIMESPANS:
        timespan = DEFAULT_TIMESPAN

    notes = list(notes)
    analysis = TrendsAnalysis(granularity=granularity)
    if not notes:
        return analysis

    end = as_aware(now) if now is not None else local_now()
    start = timespan_start(timespan, end)
    elapsed = end - start

    analysis.start_date = start
    analysis.end_date = end
    analysis.total_duration = str(elapsed)

    days: Counter[str] = Counter()
    months: Counter[str] = Counter()
    periods: Counter[str] = Counter()
    tags: Counter[str] = Counter()

    in_range = 0
    for note in notes:
        modified = as_aware(note.modified_at).astimezone(end.tzinfo)
        if not (start <= modified < end):
            continue

        in_range += 1
        days[modified.strftime("%Y-%m-%d")] += 1
        months[modified.strftime("%Y-%m")] += 1
        periods[format_period(modified, granularity)] += 1

        value = note.get("tags")
        if value is not None:
            tags.update(extract_tags(value))

    analysis.total_files_created = in_range
    analysis.total_days = int(elapsed.total_seconds() // 86400)
    analysis.active_days = len(days)
    if analysis.total_days > 0:
        analysis.activity_percentage = analysis.active_days / analysis.total_days * 100

    analysis.peak_period, analysis.peak_files = most_active(periods)

    if periods:
        analysis.avg_files_per_period = in_range / len(periods)
        # Not a period-over-period rate: the per-period average as a percentage.
        analysis.growth_rate = analysis.avg_files_per_period * 100

    analysis.most_active_day, _ = most_active(days)
    analysis.most_active_month, _ = most_active(months)
    analysis.writing_streak = writing_streak(days, end)

    analysis.timeline = [
        TimelinePoint(period=period, count=count)
        for period, count in sorted(periods.items(), reverse=True)
    ]
    analysis.tag_trends = {
        tag: TagTrend(count=count, growth_rate=count / in_range * 100) for tag, count in tags.items()
    }

    return analysis
