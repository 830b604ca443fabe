"""Domain errors surfaced to API callers."""

# Generic message for store failures; the caller may retry
STORE_FAILURE_MESSAGE = "Ошибка сохранения. Попробуйте ещё раз"


class SetValidationError(ValueError):
    """A set's magnitude is not valid for its exercise type. Raised before any write."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class SessionStateError(Exception):
    """Illegal workout session transition (e.g. completing a cancelled session)."""
