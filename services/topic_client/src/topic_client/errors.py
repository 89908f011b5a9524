"""Errors raised while requesting or consuming a topic stream."""


class TopicClientError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RelayHTTPError(TopicClientError):
    """The relay answered with a non-success status before streaming."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(TopicClientError):
    pass


class RelayConnectionError(TopicClientError):
    pass


class GenerationFailedError(TopicClientError):
    """The relay reported an upstream failure inside the stream."""


class InvalidInputError(TopicClientError):
    """Required form fields were blank; nothing was sent."""
