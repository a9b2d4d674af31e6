"""Exceptions raised by the shot history services."""


class ShotHistoryError(Exception):
    """Base class for errors raised by this package"""
    pass


class RequestError(ShotHistoryError):
    """The machine answered a request with an error"""

    def __init__(self, request_type: str, message: str):
        super().__init__(f"{request_type} failed: {message}")
        self.request_type = request_type
        self.message = message


class RecordNotFoundError(RequestError):
    """Requested shot record does not exist"""
    pass


class NotConnectedError(ShotHistoryError):
    """Raised when a request is made without an open connection"""
    pass


class RequestTimeoutError(ShotHistoryError):
    """No response arrived within the request timeout"""
    pass


class ConnectionClosedError(ShotHistoryError):
    """Raised when the connection drops while a request is pending"""
    pass
