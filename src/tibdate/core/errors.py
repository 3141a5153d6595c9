class TibdateError(Exception):
    """Base error."""

class InvalidFieldError(TibdateError, ValueError):
    """Raised when a Tibetan date field is outside its domain."""

class InvalidLeapFlagError(TibdateError, ValueError):
    """Raised in strict mode when a leap month/day flag names a slot that cannot be leap."""
