class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class MemberNotFoundError(DomainError):
    """Raised when a scanned or requested member id is not in the registry."""


class StorageError(Exception):
    """Base exception for the local blob store."""


class CorruptStorageError(StorageError):
    """Raised in strict mode when a persisted collection cannot be decoded."""


class StorageLockTimeout(StorageError):
    """Raised when the store lock key cannot be acquired in time."""
