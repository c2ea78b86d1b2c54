class MagnetRSSError(Exception):
    """Base for errors surfaced to the client as an HTTP status and message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnauthorizedError(MagnetRSSError):
    status_code = 401
    message = "Unauthorized"


class MisconfiguredError(MagnetRSSError):
    status_code = 500
    message = "Server configuration error: MAGNET_RSS_KEY is not set or invalid."


class MalformedInputError(MagnetRSSError):
    status_code = 400
    message = "Invalid request."


class NotAvailableError(MagnetRSSError):
    status_code = 404
    message = "Magnet link not set yet."


class StorageFailureError(MagnetRSSError):
    status_code = 500
    message = "Failed to access storage. Please retry."
