"""Error kinds surfaced by the nutrilog services."""


class NutrilogError(Exception):
    """Base class for domain errors."""

    code = "INTERNAL_ERROR"


class NotFoundError(NutrilogError):
    """Record is missing or not owned by the requesting user."""

    code = "NOT_FOUND"


class InvalidInputError(NutrilogError):
    """Input is well-formed but not acceptable in the current state."""

    code = "VALIDATION_ERROR"


class TransactionFailureError(NutrilogError):
    """A store transaction timed out or conflicted; the whole call may be retried."""

    code = "TRANSACTION_FAILURE"


class AuthenticationError(NutrilogError):
    """Missing or invalid credentials."""

    code = "AUTHENTICATION_ERROR"


class ConflictError(NutrilogError):
    """A unique record already exists."""

    code = "DUPLICATE_ENTRY"


class AnalysisError(NutrilogError):
    """The food analysis provider failed."""

    code = "ANALYSIS_ERROR"


class AnalysisRateLimitedError(AnalysisError):
    """Every configured analysis API key hit its quota."""

    code = "RATE_LIMIT_EXCEEDED"
