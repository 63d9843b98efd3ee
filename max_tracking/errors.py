class TrackingError(Exception):
    """Base class for failures in the tracking request path."""

    status_code = 500
    message = "Internal server error. Please try again later."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidFormat(TrackingError):
    status_code = 400
    message = "Invalid tracking number format. Please use format: MAX followed by 9 digits"


class NotFound(TrackingError):
    status_code = 404
    message = "Tracking number not found"


class StoreUnavailable(TrackingError):
    """The store could not be reached or a query failed. Details stay server-side."""


class LoggingFailure(TrackingError):
    """Raised when a lookup log write fails; caught and logged by the log itself."""
