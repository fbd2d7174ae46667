"""
Error taxonomy shared by the store, the video client and the HTTP layer.

Each error carries the HTTP status the endpoint layer answers with; the
message is sent back to the caller as plain text.
"""


class ServiceError(Exception):
    status_code = 500


class PersistenceError(ServiceError):
    """Database unreachable or a query failed."""


class StoreInitError(PersistenceError):
    """The store could not be opened, pinged or schema-initialized at startup."""


class EmptyStoreError(ServiceError):
    """A pick was attempted on an empty store."""


class TransportError(ServiceError):
    """The outbound request could not be sent or the connection failed."""


class DecodeError(ServiceError):
    """The remote response was not JSON of the expected shape."""


class RemoteAPIError(ServiceError):
    """The remote service answered with a non-zero status code."""

    def __init__(self, code: int, message: str):
        super().__init__(f"API error: {message}")
        self.code = code
        self.remote_message = message


class ValidationError(ServiceError):
    """Bad request body or content type."""
    status_code = 400


class ConfigurationError(ServiceError):
    """A feature was used without the settings it needs."""
