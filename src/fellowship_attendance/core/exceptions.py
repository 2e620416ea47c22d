class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class MemberNotFoundError(NotFoundError):
    pass


class EmailExistsError(DomainError):
    """Raised when a member with the same (normalized) email is already registered."""


class SessionNotActiveError(DomainError):
    """Raised when a session is unknown or is not the currently active one."""


class NoActiveSessionError(SessionNotActiveError):
    pass


class AlreadyMarkedError(DomainError):
    """Raised when a member already has a record for the session."""


class StoreError(Exception):
    """Base exception for record store failures."""


class DuplicateKeyError(StoreError):
    """A unique constraint was violated, regardless of backend."""

    def __init__(self, collection: str, key: str):
        super().__init__(f"duplicate key in {collection}: {key}")
        self.collection = collection
        self.key = key


class StoreUnavailableError(StoreError):
    """Any other failure while talking to the store."""
