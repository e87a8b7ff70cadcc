"""Base exceptions for the Clara gateway."""


class ClaraError(Exception):
    """Base exception for all Clara errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class InvalidParamsError(ClaraError):
    """Raised when inbound params don't match a method's declared shape.

    Attributes:
        method: Wire name of the method being decoded.
        detail: What was wrong with the params.
    """

    def __init__(self, method: str, detail: str):
        super().__init__(
            message=f"Invalid params for '{method}': {detail}",
            code="INVALID_PARAMS"
        )
        self.method = method
        self.detail = detail


class ServerStartError(ClaraError):
    """Raised when the gateway listener cannot be bound.

    Attributes:
        address: The host:port that could not be bound.
        reason: Description of the bind failure.
    """

    def __init__(self, address: str, reason: str):
        super().__init__(
            message=f"could not bind {address}: {reason}",
            code="SERVER_START_FAILED"
        )
        self.address = address
        self.reason = reason
