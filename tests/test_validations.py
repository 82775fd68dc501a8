from __future__ import annotations

import math
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Make the users_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from users_api.domain.errors import ErrorKind  # noqa: E402
from users_api.domain.validations import (  # noqa: E402
    AGE_ERROR,
    EMAIL_ERROR,
    MISSING_FIELDS_ERROR,
    NAME_ERROR,
    USER_ID_TYPE_ERROR,
    USER_ID_VALUE_ERROR,
    UNSET,
    UserUpdate,
    is_truthy,
    to_number,
    validate_age,
    validate_email,
    validate_name,
    validate_required_fields,
    validate_user_for_creation,
    validate_user_for_update,
    validate_user_id,
    validate_users_data,
)


def test_email_shape():
    assert validate_email("a@b.c").is_valid
    bad = validate_email("bad-email")
    assert not bad.is_valid
    assert bad.error == "Invalid email format"
    assert not validate_email("a b@c.d").is_valid
    assert not validate_email("a@b@c.d").is_valid
    assert not validate_email(None).is_valid
    # minimal shape only, not RFC validation
    assert validate_email("x@y.z.").is_valid
    assert validate_email("x@y..z").is_valid


def test_age_rules():
    assert validate_age(30).is_valid
    assert validate_age(0.5).is_valid
    assert validate_age(-1).error == AGE_ERROR
    assert not validate_age(0).is_valid
    assert not validate_age("30").is_valid
    assert not validate_age(True).is_valid


def test_name_is_trimmed_before_length_check():
    assert validate_name("Jo").is_valid
    assert validate_name(" J ").error == NAME_ERROR
    assert not validate_name(42).is_valid


def test_required_fields():
    ok = {"id": 1, "name": "Ann", "email": "ann@x.io", "age": 20}
    assert validate_required_fields(ok).is_valid
    for key, value in (("id", 0), ("name", ""), ("email", None), ("age", "20")):
        result = validate_required_fields({**ok, key: value})
        assert not result.is_valid
        assert result.error == MISSING_FIELDS_ERROR
        assert result.kind is ErrorKind.INVALID_INPUT
    assert not validate_required_fields({"id": 1, "name": "Ann", "email": "ann@x.io"}).is_valid
    assert not validate_required_fields(["not", "a", "record"]).is_valid


def test_creation_checks_run_in_order():
    # name fails before age and email
    result = validate_user_for_creation({"id": 1, "name": "A", "email": "bad", "age": -3})
    assert result.error == NAME_ERROR
    # age before email
    result = validate_user_for_creation({"id": 1, "name": "Ann", "email": "bad", "age": -3})
    assert result.error == AGE_ERROR
    result = validate_user_for_creation({"id": 1, "name": "Ann", "email": "bad", "age": 3})
    assert result.error == EMAIL_ERROR
    assert validate_user_for_creation({"id": "abc", "name": "Ann", "email": "a@b.c", "age": 3}).is_valid


def test_update_only_checks_supplied_fields():
    assert validate_user_for_update(UserUpdate()).is_valid
    assert validate_user_for_update(UserUpdate(age=5)).is_valid
    assert validate_user_for_update(UserUpdate(name="A", email="bad")).error == NAME_ERROR
    assert validate_user_for_update(UserUpdate(email="bad", age=-1)).error == EMAIL_ERROR
    # explicit null is supplied, not absent
    assert validate_user_for_update({"name": None}).error == NAME_ERROR


def test_user_update_from_payload_ignores_unknown_keys():
    update = UserUpdate.from_payload({"name": "Jo", "id": 9, "role": "admin"})
    assert update.name == "Jo"
    assert update.email is UNSET
    assert update.supplied() == {"name": "Jo"}


@pytest.mark.parametrize("value", [1, "1", " 42 ", "0x1A", 3.5, "1e3"])
def test_user_id_accepts_positive_numbers(value):
    assert validate_user_id(value).is_valid


def test_user_id_rejections():
    assert validate_user_id(None).error == USER_ID_TYPE_ERROR
    assert validate_user_id("").error == USER_ID_TYPE_ERROR
    assert validate_user_id(0).error == USER_ID_TYPE_ERROR
    assert validate_user_id(True).error == USER_ID_TYPE_ERROR
    assert validate_user_id(["1"]).error == USER_ID_TYPE_ERROR
    assert validate_user_id("abc").error == USER_ID_VALUE_ERROR
    assert validate_user_id("-5").error == USER_ID_VALUE_ERROR
    assert validate_user_id("0").error == USER_ID_VALUE_ERROR


def test_to_number_conversions():
    assert to_number("  12 ") == 12
    assert to_number("") == 0
    assert to_number(None) == 0
    assert to_number(True) == 1
    assert to_number("0b101") == 5
    assert to_number("-Infinity") == -math.inf
    assert math.isnan(to_number("12abc"))
    assert math.isnan(to_number("inf"))
    assert math.isnan(to_number("1_000"))
    assert math.isnan(to_number({"id": 1}))


def test_users_data_checks():
    empty = validate_users_data([])
    assert empty.error == "No users found"
    assert empty.kind is ErrorKind.EMPTY_COLLECTION
    assert validate_users_data(None).kind is ErrorKind.EMPTY_COLLECTION

    users = [{"id": 1, "name": "Ann", "email": "ann@x.io", "age": 20}]
    assert validate_users_data(users).is_valid
    broken = validate_users_data(users + [{"id": 2, "name": "Bob", "age": 30}])
    assert broken.error == "Invalid user data detected"
    assert broken.kind is ErrorKind.MALFORMED_RECORD
    assert not validate_users_data(users + [{"id": 2, "name": "Bob", "email": None, "age": 3}]).is_valid
    # presence only: types are not checked here
    assert validate_users_data([{"id": "x", "name": 1, "email": 2, "age": "old"}]).is_valid
    assert validate_users_data([{"id": 1}], required_fields=["id"]).is_valid


def test_truthiness_keeps_empty_containers():
    for value in (None, False, 0, 0.0, math.nan, ""):
        assert not is_truthy(value)
    for value in ([], {}, "0", " ", -1, True):
        assert is_truthy(value)
    assert validate_required_fields({"id": {}, "name": "Ann", "email": "a@b.c", "age": 3}).is_valid


def test_domain_imports_without_building_the_app():
    env = {**os.environ, "STORAGE_BACKEND": "bogus"}
    code = (
        "import sys, users_api.domain.validations, users_api.domain.records;"
        "assert 'users_api.app' not in sys.modules"
    )
    proc = subprocess.run([sys.executable, "-c", code], cwd=ROOT, env=env, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
