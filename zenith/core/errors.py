"""Canonical Zenith error types.

Standard error codes:
- INVALID_COMMAND: A schedule command is missing required input
- STATE_STORE_WRITE_FAILED: The persisted state could not be written
"""


class ZenithError(RuntimeError):
    """Base error carrying a code and detail strings.

    Attributes:
        code: Error code (e.g., "INVALID_COMMAND")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class CommandValidationError(ZenithError):
    """Raised when a command fails validation against the current state.

    The reducer never lets this escape: it is converted into a rejected
    CommandResult so the caller can surface the details to the user.
    """

    def __init__(self, details: list[str]):
        super().__init__("INVALID_COMMAND", details)


class StateStoreError(ZenithError):
    """Raised when the schedule state cannot be persisted."""

    def __init__(self, details: list[str]):
        super().__init__("STATE_STORE_WRITE_FAILED", details)
