"""
errors.py: Error taxonomy shared by the services and the HTTP layer.
Each error carries the status code it maps to at the request boundary.
"""


class MoodTrackerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MoodTrackerError):
    """Malformed or missing input."""
    status_code = 400


class AuthError(MoodTrackerError):
    """Missing/invalid/expired token or bad credentials."""
    status_code = 401


class NotFoundError(MoodTrackerError):
    status_code = 404


class StoreError(MoodTrackerError):
    """Underlying persistence failure. The message is never shown to clients."""
    status_code = 500
