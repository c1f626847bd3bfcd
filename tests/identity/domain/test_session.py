"""Tests for UserSession."""

import pytest
from identity.session import GUEST_EMAIL, GUEST_NAME, UserSession
from pydantic import ValidationError


def test_guest_session():
    session = UserSession.guest()
    assert session.name == GUEST_NAME == "Cliente Turbo"
    assert session.email == GUEST_EMAIL


def test_login_defaults_name_to_email():
    session = UserSession.from_login("  ana@example.com ")
    assert session.email == "ana@example.com"
    assert session.name == "ana@example.com"


def test_login_with_name():
    assert UserSession.from_login("ana@example.com", "Ana").name == "Ana"


@pytest.mark.parametrize("email", [None, "", "   "])
def test_blank_login_is_guest(email):
    assert UserSession.from_login(email) == UserSession.guest()


def test_session_is_immutable():
    with pytest.raises(ValidationError):
        UserSession.guest().email = "x@example.com"
