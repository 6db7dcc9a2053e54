"""In-memory candidate store: the single source of truth, mutated by whole-record replacement."""

import threading
from typing import Dict, Iterable, List, Optional

from resmo.errors import AuditLogViolation, CandidateNotFound
from resmo.schemas.candidate import Candidate
from resmo.utils.helpers import normalize_email
from resmo.utils.logger import get_logger

logger = get_logger(__name__)


class CandidateStore:
    """
    Candidates keyed by id, kept in insertion order. Records are frozen
    pydantic models; callers build a new record and hand it to ``replace``.
    Concurrent replacements of the same id are last-write-wins.
    """

    def __init__(self, candidates: Optional[Iterable[Candidate]] = None) -> None:
        self._lock = threading.Lock()
        self._by_id: Dict[str, Candidate] = {}
        for candidate in candidates or []:
            self.add(candidate)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, candidate_id: object) -> bool:
        return candidate_id in self._by_id

    def list_candidates(self) -> List[Candidate]:
        with self._lock:
            return list(self._by_id.values())

    def get(self, candidate_id: str) -> Candidate:
        candidate = self._by_id.get(candidate_id)
        if candidate is None:
            raise CandidateNotFound(f"No candidate with id '{candidate_id}'.")
        return candidate

    def find_by_email(self, email: str) -> Optional[Candidate]:
        wanted = normalize_email(email)
        for candidate in self.list_candidates():
            if normalize_email(candidate.email) == wanted:
                return candidate
        return None

    def add(self, candidate: Candidate) -> Candidate:
        with self._lock:
            if candidate.id in self._by_id:
                raise ValueError(f"Candidate '{candidate.id}' already exists")
            self._by_id[candidate.id] = candidate
        logger.info("Candidate added: id=%s role=%s", candidate.id, candidate.role)
        return candidate

    def replace(self, candidate: Candidate) -> Candidate:
        """
        Swap the stored record for ``candidate`` (same id). The new audit log
        must extend the stored one: entries are never dropped or reordered.
        """
        with self._lock:
            current = self._by_id.get(candidate.id)
            if current is None:
                raise CandidateNotFound(f"No candidate with id '{candidate.id}'.")
            old_log, new_log = current.audit_log, candidate.audit_log
            if len(new_log) < len(old_log) or list(new_log[: len(old_log)]) != list(old_log):
                raise AuditLogViolation(f"Audit log of '{candidate.id}' may only be appended to.")
            self._by_id[candidate.id] = candidate
        logger.debug(
            "Candidate replaced: id=%s status=%s audit_entries=%s",
            candidate.id,
            candidate.status.value,
            len(candidate.audit_log),
        )
        return candidate
