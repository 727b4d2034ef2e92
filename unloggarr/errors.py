# FILE: unloggarr/errors.py
class UnloggarrError(Exception):
    """Base class for unloggarr errors."""


class PreconditionError(UnloggarrError):
    """Raised before any external call when a request cannot proceed."""


class MissingCredentialError(PreconditionError):
    pass


class EmptyBatchError(PreconditionError):
    pass


class UpstreamError(UnloggarrError):
    """Raised when an external collaborator fails or answers non-2xx."""


class ProxyError(UpstreamError):
    pass


class CompletionError(UpstreamError):
    pass


class AnalysisStreamError(UnloggarrError):
    """Terminates a caller-facing analysis stream after it has started."""
