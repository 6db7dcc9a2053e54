import pytest

from resmo.errors import AuthenticationError
from resmo.services.auth_service import UserRole, authenticate


def test_recruiter_login(store):
    session = authenticate(store, UserRole.RECRUITER, "password")
    assert session.identifier == "recruiter"
    assert session.candidate_id is None


def test_candidate_login_resolves_identity(store):
    session = authenticate(store, UserRole.CANDIDATE, "password", "candidate.6@example.com")
    assert session.candidate_id == "cand-6"


def test_wrong_password_hints_the_placeholder(store):
    with pytest.raises(AuthenticationError, match='"password"'):
        authenticate(store, UserRole.RECRUITER, "hunter2")


def test_unknown_candidate(store):
    with pytest.raises(AuthenticationError):
        authenticate(store, UserRole.CANDIDATE, "password", "nobody@example.com")


def test_custom_password(store):
    session = authenticate(store, UserRole.RECRUITER, "s3cret", expected_password="s3cret")
    assert session.role == UserRole.RECRUITER
