"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class DuplicateWordError(DuplicateError):
    """Headword already captured in the draft or in a committed word list."""

    def __init__(self, headword: str, title: str):
        self.headword = headword
        self.title = title
        super().__init__(f"'{headword}' already exists in '{title}'")


class InvalidWordError(ValidationError):
    """Headword fails the word grammar or was rejected by the dictionary."""

    def __init__(self, headword: str, reason: str = "not a valid word"):
        self.headword = headword
        self.reason = reason
        super().__init__(f"'{headword}': {reason}")


class PersistenceError(DomainError):
    """Encoding or writing persisted state failed. Prior state is untouched."""
