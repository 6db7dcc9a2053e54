"""Exception hierarchy for Resmo. UI code catches ``ResmoError`` at the action boundary."""


class ResmoError(Exception):
    """Base class for all expected, user-reportable failures."""


# ----- AI gateway -----
class RemoteCallFailure(ResmoError):
    """Transport, timeout, auth or status error talking to the model."""


class InvalidResponseKind(ResmoError):
    """Model response was empty, not JSON, or did not match the schema."""


# ----- Resume ingestion -----
class UnsupportedFileType(ResmoError):
    """Uploaded file extension is not .txt, .pdf or .docx."""


class EmptyDocument(ResmoError):
    """A word-processor document yielded no text."""


class UnrenderableDocument(ResmoError):
    """A PDF could not be opened or rendered zero pages."""


# ----- Workflow -----
class MissingResumeData(ResmoError):
    """Analysis requested for a candidate with no resume text or images."""


class InvalidTransition(ResmoError):
    """Requested status change is not allowed from the current status."""


class CandidateNotFound(ResmoError):
    """No candidate with the given id (or email)."""


class OperationInProgress(ResmoError):
    """Another composite operation is already running for this candidate."""


class AuditLogViolation(ResmoError):
    """A replacement record would reorder or truncate the audit log."""


class AuthenticationError(ResmoError):
    """Wrong password or unknown candidate identity."""
