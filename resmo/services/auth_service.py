"""Login for the two roles. A single shared password; a placeholder, not real auth."""

import hmac
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from resmo.config import LOGIN_PASSWORD, RECRUITER_IDENTITY
from resmo.errors import AuthenticationError
from resmo.services.candidate_store import CandidateStore
from resmo.utils.logger import get_logger

logger = get_logger(__name__)


class UserRole(str, Enum):
    RECRUITER = "recruiter"
    CANDIDATE = "candidate"


class Session(BaseModel):
    role: UserRole
    identifier: str  # "recruiter", or the candidate's email
    candidate_id: Optional[str] = None


def authenticate(
    store: CandidateStore,
    role: UserRole,
    password: str,
    email: Optional[str] = None,
    expected_password: str = LOGIN_PASSWORD,
) -> Session:
    if not hmac.compare_digest((password or "").encode(), expected_password.encode()):
        logger.info("Rejected %s login: wrong password", role.value)
        raise AuthenticationError(f'Incorrect password. Hint: it is "{expected_password}".')
    if role == UserRole.RECRUITER:
        return Session(role=role, identifier=RECRUITER_IDENTITY)
    candidate = store.find_by_email(email or "")
    if candidate is None:
        raise AuthenticationError("Could not find candidate data for that email.")
    return Session(role=role, identifier=candidate.email, candidate_id=candidate.id)
