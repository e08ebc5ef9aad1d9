import json
import logging

import pytest

from investor_portal.domain.services.user_directory import UserDirectory, default_name_from_email


@pytest.mark.unit
@pytest.mark.parametrize(
    "email,expected",
    [
        ("jane.doe@example.com", "Jane Doe"),
        ("john_smith-jr@example.com", "John Smith Jr"),
        ("solo@example.com", "Solo"),
        ("@example.com", "Guest"),
        ("", "Guest"),
    ],
)
def test_default_name_from_email(email, expected):
    assert default_name_from_email(email) == expected


@pytest.mark.unit
def test_directory_hit_uses_entry_fields():
    raw = json.dumps([
        {"email": " Jane.Doe@Example.com ", "name": "Jane D.", "organization": "Acme LP", "role": "LP"},
    ])
    directory = UserDirectory.from_json(raw)

    profile = directory.resolve_user_profile(email="jane.doe@example.com", user_id="abc")
    assert profile.name == "Jane D."
    assert profile.organization == "Acme LP"
    assert profile.role == "LP"
    assert profile.user_id == "abc"


@pytest.mark.unit
def test_directory_hit_without_name_generates_one():
    directory = UserDirectory.from_json(json.dumps([{"email": "jane.doe@example.com"}]))
    profile = directory.resolve_user_profile(email="jane.doe@example.com", user_id="abc")
    assert profile.name == "Jane Doe"
    assert profile.role is None


@pytest.mark.unit
def test_directory_miss_falls_back_to_guest():
    profile = UserDirectory().resolve_user_profile(email="Pat.Lee@example.com", user_id="u1")
    assert profile.email == "pat.lee@example.com"
    assert profile.name == "Pat Lee"
    assert profile.organization is None
    assert profile.role == "Guest"


@pytest.mark.unit
def test_malformed_entries_are_skipped():
    raw = json.dumps([{"name": "No Email"}, "not-a-dict", {"email": 42}, {"email": "ok@example.com"}])
    assert len(UserDirectory.from_json(raw)) == 1


@pytest.mark.unit
def test_invalid_json_logs_and_returns_empty(caplog):
    with caplog.at_level(logging.WARNING):
        directory = UserDirectory.from_json("{not json")
    assert len(directory) == 0
    assert "USER_DIRECTORY_JSON" in caplog.text


@pytest.mark.unit
def test_non_list_json_returns_empty():
    assert len(UserDirectory.from_json(json.dumps({"email": "a@example.com"}))) == 0
