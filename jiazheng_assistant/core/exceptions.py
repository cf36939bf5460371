"""Project exception hierarchy."""


class AssistantError(Exception):
    """Base error for the assistant backend."""


class LLMServiceError(AssistantError):
    """The external text-generation service failed or returned nothing usable."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class PaymentError(AssistantError):
    """A checkout request could not be turned into an order."""
