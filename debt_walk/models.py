"""Plain data containers shared by the tracker modules."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TokenPair:
    """Access/refresh token pair returned by the token endpoint."""
    access_token: str
    refresh_token: str | None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "TokenPair":
        # Strava also sends expires_at, expires_in and an athlete summary
        return cls(access_token=data["access_token"], refresh_token=data.get("refresh_token"))


@dataclass(frozen=True)
class Activity:
    """A single activity record as listed by the Strava API.

    Distances are in meters and durations in seconds, exactly as the API
    reports them. ``total_elevation_gain`` may be missing on some records.
    """
    id: int
    name: str
    distance: float
    start_date: str | None = None
    moving_time: int | None = None
    total_elevation_gain: float | None = None

    @classmethod
    def from_api(cls, record: dict[str, Any]) -> "Activity":
        return cls(
            id=record.get("id"),
            name=record.get("name"),
            distance=float(record.get("distance") or 0),
            start_date=record.get("start_date"),
            moving_time=record.get("moving_time"),
            total_elevation_gain=record.get("total_elevation_gain"),
        )


@dataclass(frozen=True)
class ActivityView:
    """Simplified, display-ready view of an Activity."""
    name: str
    date: str | None
    distance: str
    moving_time: int | None
    elevation_gain: str
    id: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "date": self.date,
            "distance": self.distance,
            "movingTime": self.moving_time,
            "elevationGain": self.elevation_gain,
            "id": self.id,
        }


@dataclass(frozen=True)
class StatsSummary:
    """Aggregated progress against the goal distance.

    ``total_distance`` is rounded for display, ``remaining_miles`` is not
    and goes negative once the goal is exceeded.
    """
    total_distance: str
    remaining_miles: float
    activity_count: int
    activities: list[ActivityView] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalDistance": self.total_distance,
            "remainingMiles": self.remaining_miles,
            "activityCount": self.activity_count,
            "activities": [view.to_dict() for view in self.activities],
        }


@dataclass(frozen=True)
class AthleteProfile:
    """The authenticated athlete as returned by ``GET /athlete``."""
    id: int
    firstname: str | None
    lastname: str | None
    city: str | None = None
    state: str | None = None
    profile: str | None = None
    profile_medium: str | None = None

    @property
    def name(self) -> str:
        return f"{self.firstname} {self.lastname}"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "AthleteProfile":
        return cls(
            id=data.get("id"),
            firstname=data.get("firstname"),
            lastname=data.get("lastname"),
            city=data.get("city"),
            state=data.get("state"),
            profile=data.get("profile"),
            profile_medium=data.get("profile_medium"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "profile_medium": self.profile_medium,
            "profile": self.profile,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "AthleteProfile":
        # "name" is derived, from_api ignores it
        return cls.from_api(json.loads(text))


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an authentication attempt; never raised, always returned."""
    success: bool
    access_token: str | None = None
    refresh_token: str | None = None
    athlete: AthleteProfile | None = None
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> "AuthResult":
        return cls(success=False, error=message)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "athlete": self.athlete.to_dict() if self.athlete else None,
        }
