"""Tests for the login guard around CLI commands."""

import json

import pytest


@pytest.fixture
def protected(monkeypatch, run_cli):
    monkeypatch.setenv("CASHTRACK_PASSWORD", "s3cret")
    return run_cli


def test_commands_open_without_password(run_cli):
    result = run_cli("account", "list")

    assert result.exit_code == 0


def test_login_not_required_without_password(run_cli):
    result = run_cli("login", "--password", "anything")

    assert result.exit_code == 0
    assert "login is not required" in result.output


def test_guarded_command_requires_login(protected):
    result = protected("account", "list")

    assert result.exit_code == 1
    assert "Not logged in" in result.output


def test_login_with_wrong_password(protected):
    result = protected("login", "--password", "nope")

    assert result.exit_code == 1
    assert "Incorrect password" in result.output
    assert protected("account", "list").exit_code == 1


def test_login_then_logout(protected, session_path):
    result = protected("login", "--password", "s3cret")
    assert result.exit_code == 0
    assert "Logged in." in result.output

    with open(session_path, encoding="utf-8") as f:
        assert json.load(f)["session"] == "authenticated"

    assert protected("account", "list").exit_code == 0

    result = protected("logout")
    assert "Logged out." in result.output
    assert protected("account", "list").exit_code == 1


def test_login_prompts_for_password(protected):
    result = protected("login", input="s3cret\n")

    assert result.exit_code == 0
    assert "Logged in." in result.output
