"""Custom exceptions for the task notes NLP parser."""


class UnknownLanguageError(ValueError):
    """Raised when a language code has no shipped pattern table."""

    pass


class InvalidRecurrenceError(ValueError):
    """Raised when a recurrence rule string cannot be interpreted."""

    pass
