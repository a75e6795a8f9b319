"""
Blog ranking scores.

All functions are pure: the current time is passed in by the caller.
"""
import math
from datetime import datetime, timezone


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_hours(created_at: datetime, now: datetime) -> float:
    """Hours between created_at and now, clamped at zero for future timestamps"""
    delta = (_as_utc(now) - _as_utc(created_at)).total_seconds()
    return max(0.0, delta) / 3600


def trending_score(created_at: datetime, comment_count: int, upvote_count: int, now: datetime) -> float:
    """
    Logarithmic recency decay times weighted engagement.

        recency    = 1 / log2(age_hours + 2)
        engagement = comments * 2 + upvotes

    A brand new blog has recency 1; the weight halves at two hours and keeps
    shrinking slowly after that.
    """
    recency_weight = 1 / math.log2(age_hours(created_at, now) + 2)
    engagement_weight = comment_count * 2 + upvote_count
    return recency_weight * engagement_weight


def legacy_trending_score(created_at: datetime, comment_count: int, upvote_count: int, now: datetime) -> float:
    """Earlier linear formula: upvotes * 3 + comments * 2 - age_hours * 0.5. Not used for ranking."""
    return upvote_count * 3 + comment_count * 2 - age_hours(created_at, now) * 0.5


def engagement_score(comment_count: int, upvote_count: int) -> int:
    """Plain engagement sum used for recommendations"""
    return comment_count + upvote_count
