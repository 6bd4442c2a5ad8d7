"""History views over committed word lists: search and date grouping."""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from enum import Enum

from wordcapture.domain.model.collection import Collection


class RecencyBucket(str, Enum):
    TODAY = 'today'
    YESTERDAY = 'yesterday'
    LAST_7_DAYS = 'last_7_days'
    LAST_30_DAYS = 'last_30_days'
    EARLIER = 'earlier'


def search(collections: Sequence[Collection], query: str) -> list[Collection]:
    """Collections whose title, headwords or annotations contain query."""
    needle = query.strip().lower()
    if not needle:
        return list(collections)
    return [
        c for c in collections
        if needle in c.title.lower()
        or any(needle in e.headword or needle in e.annotation.lower() for e in c.entries)
    ]


def recency_bucket(created_at: datetime, now: datetime) -> RecencyBucket:
    created_day = created_at.astimezone().date()
    today = now.astimezone().date()
    if created_day == today:
        return RecencyBucket.TODAY
    if created_day == today - timedelta(days=1):
        return RecencyBucket.YESTERDAY
    days = (today - created_day).days
    if days <= 7:
        return RecencyBucket.LAST_7_DAYS
    if days <= 30:
        return RecencyBucket.LAST_30_DAYS
    return RecencyBucket.EARLIER


def group_by_recency(
    collections: Sequence[Collection],
    now: datetime | None = None,
) -> list[tuple[RecencyBucket, list[Collection]]]:
    """Group collections into fixed-order recency buckets, skipping empty ones."""
    now = now or datetime.now(timezone.utc)
    groups: dict[RecencyBucket, list[Collection]] = {}
    for collection in collections:
        groups.setdefault(recency_bucket(collection.created_at, now), []).append(collection)
    return [(bucket, groups[bucket]) for bucket in RecencyBucket if bucket in groups]


def group_by_month(collections: Sequence[Collection]) -> list[tuple[str, list[Collection]]]:
    """Group by local creation month ('2025年9月'), newest month first."""
    groups: dict[tuple[int, int], list[Collection]] = {}
    for collection in collections:
        local = collection.created_at.astimezone()
        groups.setdefault((local.year, local.month), []).append(collection)
    return [
        (f"{year}年{month}月", groups[(year, month)])
        for year, month in sorted(groups, reverse=True)
    ]
