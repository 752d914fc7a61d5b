"""Caller-side service exceptions."""


class InvalidRequirementError(Exception):
    """
    Raised when a requirement is rejected before any provider call.

    Maps to HTTP 400 at the API layer.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.http_status = 400
