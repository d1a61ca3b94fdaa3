"""Tests for the shared-password session."""

from datetime import datetime, timedelta, UTC

import pytest

from cashtrack.domain.session import (
    DEFAULT_TIMEOUT,
    FileSessionStorage,
    MemorySessionStorage,
    Session,
    is_expired,
)

START = datetime(2024, 3, 15, 9, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return Session("s3cret", MemorySessionStorage(), clock=clock)


def test_is_expired_without_activity():
    assert is_expired(None, START) is True


def test_is_expired_boundary():
    assert is_expired(START, START + DEFAULT_TIMEOUT) is False
    assert is_expired(START, START + DEFAULT_TIMEOUT + timedelta(seconds=1)) is True


def test_is_expired_custom_timeout():
    assert is_expired(START, START + timedelta(minutes=6), timedelta(minutes=5)) is True


def test_login_with_wrong_password_fails(session):
    assert session.login("guess") is False
    assert session.login(None) is False
    assert session.is_authenticated() is False


def test_login_and_activity(session, clock):
    assert session.login("s3cret") is True
    assert session.is_authenticated() is True
    assert session.last_activity() == START

    clock.advance(minutes=20)
    session.touch()
    clock.advance(minutes=20)
    assert session.is_authenticated() is True


def test_session_expires_after_inactivity(session, clock):
    session.login("s3cret")
    clock.advance(minutes=31)

    assert session.is_authenticated() is False
    # Expiry ends the session for good
    clock.now = START
    assert session.is_authenticated() is False


def test_logout(session):
    session.login("s3cret")
    session.logout()

    assert session.is_authenticated() is False
    assert session.last_activity() is None


def test_no_password_allows_access():
    open_session = Session(None, MemorySessionStorage())

    assert open_session.password_required is False
    assert open_session.is_authenticated() is True
    assert open_session.login(None) is True


def test_file_storage_persists_between_instances(tmp_path, clock):
    path = tmp_path / "nested" / "session.json"
    Session("pw", FileSessionStorage(path), clock=clock).login("pw")

    reopened = Session("pw", FileSessionStorage(path), clock=clock)
    assert reopened.is_authenticated() is True
    assert reopened.last_activity() == START


def test_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    storage = FileSessionStorage(path)
    assert storage.get("session") is None
    storage.set("session", "authenticated")
    assert storage.get("session") == "authenticated"
