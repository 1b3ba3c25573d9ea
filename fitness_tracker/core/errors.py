"""Error taxonomy shared by services and the HTTP layer.

Services raise these; ``fitness_tracker.api.errors`` turns them into
``{"error": ..., "reason": ...}`` responses. Storage exceptions never leave the
service layer untranslated (see ``fitness_tracker.db.transaction``).
"""


class FitnessTrackerError(Exception):
    """Base error. ``reason`` is a stable machine-readable code."""

    reason = "error"

    def __init__(self, message: str, reason: str | None = None):
        self.message = message
        if reason is not None:
            self.reason = reason
        super().__init__(message)


class ValidationError(FitnessTrackerError):
    """Malformed input, always detected before any write."""

    reason = "validation_error"


class AuthenticationError(FitnessTrackerError):
    """Missing, malformed or expired credentials."""

    reason = "unauthorized"


class NotFoundError(FitnessTrackerError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, message: str | None = None):
        self.entity = entity
        super().__init__(
            message or f"{entity} not found",
            reason=f"{_snake(entity)}_not_found",
        )


class ConflictError(FitnessTrackerError):
    """Uniqueness violation or a delete blocked by existing references."""

    reason = "conflict"


class InternalError(FitnessTrackerError):
    """Storage failure not attributable to the caller."""

    reason = "internal_error"


def _snake(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i:
            out.append("_")
        out.append(ch.lower())
    return "".join(out)
