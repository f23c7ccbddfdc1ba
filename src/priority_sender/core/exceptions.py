# src/priority_sender/core/exceptions.py

class PrioritySenderException(Exception):
    """Base class for custom exceptions in this application."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(PrioritySenderException):
    """Connection, timeout or HTTP status failure talking to the fee service or the RPC node."""
    pass


class DeserializationError(PrioritySenderException):
    """The fee-estimation service returned a body that could not be parsed."""
    pass


class EmptyEstimateError(PrioritySenderException):
    """The fee-estimation service responded but supplied no priority fee estimate."""
    pass


class SubmissionRejectedError(PrioritySenderException):
    """The RPC node rejected the transaction (e.g. preflight simulation failed)."""
    pass
