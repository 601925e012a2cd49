"""
Error taxonomy shared by services and the API layer

Services raise these; main.py renders them with the mapped status code.
"""


class ShiftTrackerError(Exception):
    """Base error carrying the HTTP status it maps to"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShiftTrackerError):
    status_code = 404


class TooEarlyError(ShiftTrackerError):
    """Start attempted before the early check-in window opened"""

    status_code = 400


class NotStartedError(ShiftTrackerError):
    """End attempted on a visit that was never started"""

    status_code = 400


class InvalidTransitionError(ShiftTrackerError):
    status_code = 400


class ValidationError(ShiftTrackerError):
    status_code = 400


class ClientHasSchedulesError(ValidationError):
    status_code = 409


class StorageTransientError(ShiftTrackerError):
    """Busy/locked condition from the database; retried before escalating"""

    status_code = 503


class StorageFailureError(ShiftTrackerError):
    status_code = 503
