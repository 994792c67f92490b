from __future__ import annotations

import datetime as dt

import pytest

from semapi.core.errors import ValidationError
from semapi.core.validation import (
    parse_duration,
    validate_lock_params,
    validate_owner_params,
    validate_unlock_params,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1s", dt.timedelta(seconds=1)),
        ("500ms", dt.timedelta(milliseconds=500)),
        ("1.5s", dt.timedelta(milliseconds=1500)),
        ("1h30m", dt.timedelta(hours=1, minutes=30)),
        ("2m3.5s", dt.timedelta(minutes=2, seconds=3.5)),
        ("250us", dt.timedelta(microseconds=250)),
        ("250µs", dt.timedelta(microseconds=250)),
        (".5s", dt.timedelta(milliseconds=500)),
        ("+10s", dt.timedelta(seconds=10)),
        ("-1s", dt.timedelta(seconds=-1)),
        ("0", dt.timedelta(0)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "1", "s", "abc", "1x", "1 s", "1s-", ".", " 1s ", "1s\n", "100000000000h", "9223372036855ms"],
)
def test_parse_duration_rejects_garbage(text):
    with pytest.raises(ValidationError) as excinfo:
        parse_duration(text)
    assert excinfo.value.field == "ttl"


def test_validate_lock_params():
    target, user, ttl = validate_lock_params("org-repo-stage", "test", "1s")
    assert (target, user, ttl) == ("org-repo-stage", "test", dt.timedelta(seconds=1))


@pytest.mark.parametrize(
    "target, user, ttl, field",
    [
        ("", "test", "1s", "target"),
        (None, "test", "1s", "target"),
        ("org-repo-stage", "", "1s", "user"),
        ("org-repo-stage", None, "1s", "user"),
        ("org-repo-stage", "test", None, "ttl"),
        ("org-repo-stage", "test", "soon", "ttl"),
        ("org-repo-stage", "test", "0", "ttl"),
        ("org-repo-stage", "test", "-5s", "ttl"),
        ("org-repo-stage", "test", "500us", "ttl"),
    ],
)
def test_validate_lock_params_errors(target, user, ttl, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_lock_params(target, user, ttl)
    assert excinfo.value.field == field


def test_validate_unlock_params():
    assert validate_unlock_params("org-repo-stage", "test") == ("org-repo-stage", "test")
    with pytest.raises(ValidationError, match="user is required"):
        validate_unlock_params("org-repo-stage", "  ")


def test_parse_duration_upper_bound():
    assert parse_duration("2562047h") == dt.timedelta(hours=2562047)


def test_validate_owner_params():
    assert validate_owner_params("org-repo-stage", "test") == ("org-repo-stage", "test")
    with pytest.raises(ValidationError) as excinfo:
        validate_owner_params("", "test")
    assert excinfo.value.field == "target"
