"""Errors the relay turns into `{"error": ...}` responses."""


class RelayError(Exception):
    status_code = 500
    outcome = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(RelayError):
    """Missing or invalid request fields; the user can correct them."""

    status_code = 400
    outcome = "invalid_request"


class ConfigurationError(RelayError):
    """Server is missing configuration (the provider credential)."""

    status_code = 500
    outcome = "config_error"


class UpstreamError(RelayError):
    """The model provider call failed."""

    status_code = 500
    outcome = "upstream_error"
