"""Exception hierarchy for date conversion."""


class StardateError(Exception):
    """Base exception for date conversion errors.

    Provides dual messaging: a short user-facing message and internal
    details (including the offending token) for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class ValueOutOfRangeError(StardateError):
    """Raised when a token matched a format but a field failed validation.

    Attributes:
        field: The offending field ("month", "day", "integer", "date", ...).
        token: The original input text.
    """

    def __init__(self, field: str, token: str, wrapped: Exception | None = None) -> None:
        message = self._message(field)
        super().__init__(message, f"{message}: {token}", wrapped)
        self.field = field
        self.token = token

    @staticmethod
    def _message(field: str) -> str:
        return f"{field} is out of range"


class MalformedDateError(ValueOutOfRangeError):
    """Raised when a token committed to a format but its tail is malformed."""

    @staticmethod
    def _message(field: str) -> str:
        return f"malformed {field}"


class UnrecognizedDateError(StardateError):
    """Raised when no decoder recognises a token."""

    def __init__(self, token: str) -> None:
        super().__init__(
            "date format unrecognised",
            f"date format unrecognised: {token}",
        )
        self.token = token


class InvalidPrecisionError(StardateError):
    """Raised when a stardate output precision is outside 0-6."""


class UnknownFormatError(StardateError):
    """Raised when a format selector or name is not registered."""
