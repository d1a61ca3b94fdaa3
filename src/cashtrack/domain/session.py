"""Shared-password session with an inactivity timeout.

The session keeps no global state: the clock and the storage are passed in,
so the timeout rule can be checked with any notion of "now".
"""

import hmac
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=30)
SESSION_KEY = "session"
ACTIVITY_KEY = "last_activity"


def is_expired(last_activity: Optional[datetime], now: datetime, timeout: timedelta = DEFAULT_TIMEOUT) -> bool:
    """Return True when no activity is recorded or it is older than ``timeout``."""
    if last_activity is None:
        return True
    return now - last_activity > timeout


class SessionStorage(ABC):
    """Key/value storage for session state."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemorySessionStorage(SessionStorage):
    """In-process storage, lost when the process exits."""

    def __init__(self):
        self._values: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileSessionStorage(SessionStorage):
    """Storage backed by a small JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self._write(values)

    def remove(self, key: str) -> None:
        values = self._read()
        if key in values:
            del values[key]
            self._write(values)


def utc_now() -> datetime:
    return datetime.now(UTC)


class Session:
    """Login state guarded by a single shared password."""

    def __init__(
        self,
        password: Optional[str],
        storage: SessionStorage,
        clock: Callable[[], datetime] = utc_now,
        timeout: timedelta = DEFAULT_TIMEOUT,
    ):
        """Initialize session.

        Args:
            password: Shared password; None or empty disables the check
            storage: Where the session marker and last activity are kept
            clock: Returns the current time
            timeout: Inactivity period after which the session ends
        """
        self.password = password or None
        self.storage = storage
        self.clock = clock
        self.timeout = timeout

    @property
    def password_required(self) -> bool:
        return self.password is not None

    def last_activity(self) -> Optional[datetime]:
        raw = self.storage.get(ACTIVITY_KEY)
        if raw is None:
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None

    def login(self, password: Optional[str]) -> bool:
        """Start a session if the password matches.

        Returns:
            True when the session was started
        """
        if self.password_required:
            if password is None or not hmac.compare_digest(password, self.password):
                logger.info("Rejected login attempt")
                return False
        else:
            logger.warning("No password configured, allowing access")

        self.storage.set(SESSION_KEY, "authenticated")
        self.touch()
        return True

    def logout(self) -> None:
        self.storage.remove(SESSION_KEY)
        self.storage.remove(ACTIVITY_KEY)

    def touch(self) -> None:
        """Record activity now."""
        self.storage.set(ACTIVITY_KEY, self.clock().isoformat())

    def is_authenticated(self) -> bool:
        """Check the session, ending it if it has expired."""
        if not self.password_required:
            return True
        if self.storage.get(SESSION_KEY) is None:
            return False
        if is_expired(self.last_activity(), self.clock(), self.timeout):
            logger.info("Session expired")
            self.logout()
            return False
        return True
