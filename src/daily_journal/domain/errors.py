"""Errors raised by the journal engine."""


class JournalError(Exception):
    """Base class for journal errors."""


class ValidationError(JournalError):
    """Input was rejected before any state changed."""


class StorageError(JournalError):
    """A persistence write failed."""


class NotFound(JournalError):  # noqa: N818
    """The referenced entry, day, combo or index no longer exists."""
