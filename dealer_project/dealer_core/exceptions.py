from django.core.exceptions import ValidationError

# Domain errors subclass ValidationError so views and admin actions
# can report every business failure the same way.


class MonthAlreadyClosedError(ValidationError):
    """Raised when close_month targets a period that already has a closure."""
    pass


class MonthNotClosedError(ValidationError):
    """Raised when restore_month targets a period without a closure."""
    pass


class ClosedPeriodError(ValidationError):
    """Raised when a transaction is dated inside a closed month."""
    pass


class InvalidDivisionError(ValidationError):
    """Raised when an operation needs a concrete division and got none."""
    pass


class InsufficientStockError(ValidationError):
    """Raised when a motor type stock would drop below zero."""
    pass
