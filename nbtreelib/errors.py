"""Exception hierarchy for nbtreelib.

Contract violations (bad values, node operations on the empty tree) are
raised at the call site. Persistence failures derive from PersistenceError
and are turned into a False result by ``save``/``restore``. Unexpected I/O
faults are never wrapped: the underlying OSError reaches the caller.
"""


class NumericTreeError(Exception):
    """Base class for all nbtreelib errors."""
    pass


class InvalidValueError(NumericTreeError, ValueError):
    """Raised when a node would be given a missing or non-numeric value."""

    def __init__(self, value=None, message: str = None):
        self.value = value
        if message is None:
            if value is None:
                message = "A non-empty tree requires a value, got None"
            else:
                message = (
                    f"Tree values must be numeric, got "
                    f"{type(value).__name__}: {value!r}"
                )
        super().__init__(message)


class EmptyTreeOperationError(NumericTreeError, LookupError):
    """Raised when an operation needing node content runs on the empty tree.

    Callers can always avoid this by checking ``is_empty()`` first.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}() is not defined for the empty tree")


class PersistenceError(NumericTreeError):
    """Base class for recoverable persistence failures."""
    pass


class TreeDecodeError(PersistenceError):
    """Raised when a byte stream is not a well-formed encoded tree."""

    def __init__(self, message: str, offset: int = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class TreeEncodeError(PersistenceError, TypeError):
    """Raised when a node value has no representation in the byte format."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Cannot encode value of type {type(value).__name__}: {value!r}"
        )


class LocationUnavailableError(PersistenceError):
    """Raised when a storage location is missing or cannot be opened."""

    def __init__(self, location, reason: str = None):
        self.location = location
        self.reason = reason
        message = f"Storage location unavailable: {location!s}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class VerificationError(PersistenceError):
    """Raised when a saved tree does not read back as an identical tree."""

    def __init__(self, location, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Verification of {location!s} failed: {reason}")
