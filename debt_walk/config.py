from dataclasses import dataclass
from pathlib import Path


DEFAULT_GOAL_MILES = 364.0
DEFAULT_ACTIVITY_NAME = "Debt Walk"


@dataclass(frozen=True)
class ClientConfig:
	"""Process-wide configuration for the Strava client.

	Attributes
	----------
	client_id: str
		Strava application client id.
	client_secret: str
		Strava application client secret.
	redirect_uri: str
		URI Strava redirects to (with a ``code`` parameter) after approval.
	athlete_id: int | None
		Athlete whose activities are listed. When None the authenticated
		athlete's own activity list is used.
	goal_miles: float
		Target distance the walked miles are measured against.
	activity_name: str
		Exact (case-sensitive) name of the activities to count.
	store_file: Path | None
		Optional path of the JSON file holding the persisted session.
	"""
	client_id: str
	client_secret: str
	redirect_uri: str
	athlete_id: int | None = None
	goal_miles: float = DEFAULT_GOAL_MILES
	activity_name: str = DEFAULT_ACTIVITY_NAME
	store_file: Path | None = None
