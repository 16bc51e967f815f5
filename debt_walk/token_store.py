"""Abstract interfaces and concrete implementations for session storage.

This module defines the KeyValueStore abstraction so the persisted session
(access token, refresh token, serialized athlete) can live in a JSON file,
in memory, or any secure store without changing the orchestrator.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "stravaAccessToken"
REFRESH_TOKEN_KEY = "stravaRefreshToken"
ATHLETE_KEY = "stravaAthlete"


class KeyValueStore(ABC):
    """Abstract base class for string key-value persistence strategies."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if not found."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored entry."""
        pass


class FileKeyValueStore(KeyValueStore):
    """Key-value storage backed by a JSON file."""

    def __init__(self, file_path: Path | str) -> None:
        """Initialize with a file path for the store."""
        self.file_path = Path(file_path)

    def _load(self) -> dict[str, str]:
        try:
            if not self.file_path.exists():
                return {}
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                logger.warning("Ignoring malformed store %s", self.file_path)
                return {}
            return data
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to load store from %s", self.file_path)
            return {}

    def get(self, key: str) -> str | None:
        """Read ``key`` from the JSON file if it exists."""
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        """Write ``key`` into the JSON file, keeping the other entries."""
        data = self._load()
        data[key] = value
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        logger.debug("Saved %s to %s", key, self.file_path)

    def clear(self) -> None:
        """Delete the JSON file."""
        self.file_path.unlink(missing_ok=True)
        logger.debug("Cleared store %s", self.file_path)


class InMemoryKeyValueStore(KeyValueStore):
    """Key-value storage in memory (lost on process exit)."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()
