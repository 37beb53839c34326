"""
Errors surfaced by the client.

Callers can tell a network problem (TransportError) apart from a server
reply that did not have the expected shape (DecodingError).
"""

from typing import Optional


class OpenAIError(Exception):
    """Base class for every error raised by openai_kit."""


class TransportError(OpenAIError):
    """The request never produced a response (DNS, refused connection, timeout...)."""

    def __init__(self, error: BaseException):
        super().__init__(f"Transport error: {error}")
        self.error = error


class DecodingError(OpenAIError):
    """The server responded, but the body could not be decoded into the expected type."""

    def __init__(
        self,
        error: Optional[BaseException],
        status_code: Optional[int] = None,
        body: bytes = b"",
        api_message: Optional[str] = None,
    ):
        detail = api_message or (str(error) if error else "no detail")
        if status_code is not None:
            message = f"Decoding error (HTTP {status_code}): {detail}"
        else:
            message = f"Decoding error: {detail}"
        super().__init__(message)
        self.error = error
        self.status_code = status_code
        self.body = body
        self.api_message = api_message


class EmptyResponseError(DecodingError):
    """The server completed the exchange without sending a body."""

    def __init__(self, status_code: Optional[int] = None):
        super().__init__(None, status_code=status_code, api_message="empty response body")
