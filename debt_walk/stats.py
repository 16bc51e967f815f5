"""Distance statistics for the filtered activities."""
from typing import Iterable

from .models import Activity, ActivityView, StatsSummary

METERS_PER_MILE = 1609.34


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def aggregate(activities: Iterable[Activity], goal_miles: float) -> StatsSummary:
    """Reduce activities to totals measured against ``goal_miles``.

    Only the display strings are rounded; ``remaining_miles`` is computed
    from the full-precision sum.
    """
    views = []
    total = 0.0
    for activity in activities:
        miles = meters_to_miles(activity.distance)
        total += miles
        views.append(ActivityView(
            name=activity.name,
            date=activity.start_date,
            distance=f"{miles:.2f}",
            moving_time=activity.moving_time,
            elevation_gain=f"{activity.total_elevation_gain or 0:.2f}",
            id=activity.id,
        ))

    return StatsSummary(
        total_distance=f"{total:.2f}",
        remaining_miles=goal_miles - total,
        activity_count=len(views),
        activities=views,
    )
