"""AxiomTrack exception hierarchy.

These exceptions are raised inside the integration layer (HTTP base client,
payload normalization, credential store) and caught at the public operation
boundary, where they are logged and converted to fallback data.
"""


class AxiomTrackError(Exception):
    """Base exception for all AxiomTrack errors.

    All custom exceptions in AxiomTrack should inherit from this class
    to enable consistent error handling and logging.
    """

    pass


class CredentialsMissingError(AxiomTrackError):
    """Raised when an authenticated call is attempted without session tokens.

    Example:
        raise CredentialsMissingError("Axiom auth tokens not set")
    """

    pass


class MalformedPayloadError(AxiomTrackError):
    """Raised when an upstream body or socket message cannot be interpreted.

    Attributes:
        source: Where the payload came from (operation or channel name).

    Example:
        raise MalformedPayloadError("expected list", source="get_trending")
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class ExternalServiceError(AxiomTrackError):
    """Raised when an external service call fails.

    Attributes:
        service: Name of the external service that failed.
        status_code: HTTP status code if available, None otherwise.

    Example:
        raise ExternalServiceError(service="axiom", message="Rate limited", status_code=429)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class CircuitBreakerOpenError(AxiomTrackError):
    """Raised when circuit breaker is open.

    Use this when an API client's circuit breaker has tripped due to
    consecutive failures and requests are being blocked.

    Example:
        raise CircuitBreakerOpenError("Circuit is open for Axiom API")
    """

    pass
