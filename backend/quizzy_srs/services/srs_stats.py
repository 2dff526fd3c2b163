from __future__ import annotations

from datetime import datetime

from ..models.srs import SchedulingRecord, SRSStats
from .srs_engine import MASTERED_INTERVAL_DAYS


def end_of_local_day_ms(now: int) -> int:
    """23:59:59.999 local time on the calendar day containing ``now``."""
    local = datetime.fromtimestamp(now / 1000)
    end = local.replace(hour=23, minute=59, second=59, microsecond=999000)
    return int(round(end.timestamp() * 1000))


def compute_stats(records: dict[str, SchedulingRecord], now: int) -> SRSStats:
    cutoff = end_of_local_day_ms(now)
    values = list(records.values())
    return SRSStats(
        total_tracked=len(values),
        due_today=sum(1 for r in values if r.next_review_due_at <= cutoff),
        mastered_count=sum(1 for r in values if r.interval_days >= MASTERED_INTERVAL_DAYS),
    )
