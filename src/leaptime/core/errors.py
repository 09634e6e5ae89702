class LeaptimeError(Exception):
    """Base error."""

class LeapSourceError(LeaptimeError):
    """Raised when a leap-second source cannot be read or parsed."""

class NotInitializedWarning(UserWarning):
    """Issued when conversions run without a loaded leap-second table."""
