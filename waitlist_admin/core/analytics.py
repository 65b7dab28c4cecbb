from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .applicant import Applicant

DATE_KEYS = ("approvedAt", "createdAt", "postedDate", "datePosted")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class WaitlistAnalytics:
    total: int
    unemployed: int
    avg_age: int
    computer_access_percentage: int


@dataclass(frozen=True)
class AnalyticsPoint:
    date: str
    value: int


def summarize_applicants(applicants: Sequence[Applicant]) -> WaitlistAnalytics:
    total = len(applicants)
    unemployed = sum(
        1 for a in applicants if "unemployed" in a.current_employment_status.lower()
    )
    ages = [
        float(a.age)
        for a in applicants
        if isinstance(a.age, (int, float)) and not isinstance(a.age, bool) and math.isfinite(a.age)
    ]
    avg_age = _round_half_up(sum(ages) / len(ages)) if ages else 0
    with_computer = sum(1 for a in applicants if a.has_computer_access)
    pct = _round_half_up(with_computer / total * 100) if total else 0
    return WaitlistAnalytics(
        total=total,
        unemployed=unemployed,
        avg_age=avg_age,
        computer_access_percentage=pct,
    )


def _pick_date(record: Mapping[str, Any]) -> Any:
    for key in DATE_KEYS:
        value = record.get(key)
        if value is not None:
            return value
    return None


def transform_analytics_data(
    records: Iterable[Mapping[str, Any]],
    days: int,
    now: Optional[datetime] = None,
) -> List[AnalyticsPoint]:
    """
    Count records per calendar day over the last ``days`` days.

    The first available date among approvedAt/createdAt/postedDate/datePosted
    is used; unparseable dates are skipped. Points are ordered by day and
    labelled like "Mar 05".
    """
    safe_days = days if isinstance(days, (int, float)) and math.isfinite(days) and days > 0 else 0
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = pd.Timestamp(now - timedelta(days=safe_days))

    raw_dates = [_pick_date(r) for r in records if r]
    dates = pd.to_datetime(
        pd.Series(raw_dates, dtype="object"), errors="coerce", utc=True, format="mixed"
    )
    dates = dates.dropna()
    if dates.empty:
        return []
    dates = dates[dates > cutoff]
    if dates.empty:
        return []

    counts = dates.dt.strftime("%Y-%m-%d").value_counts().sort_index()
    return [
        AnalyticsPoint(date=pd.Timestamp(day).strftime("%b %d"), value=int(n))
        for day, n in counts.items()
    ]
