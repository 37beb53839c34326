"""
Request pipeline shared by every operation.

Builds one HTTP request from an endpoint and a payload, sends it once and
decodes the body into the expected response model. There is no retry at
any point: failures go straight back to the caller.
"""
import json
import logging
import time
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .endpoints import Endpoint
from .errors import DecodingError, EmptyResponseError, TransportError
from .models import RequestPayload

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


class RequestPipeline:
    """Turns (endpoint, payload) into a decoded response."""

    def __init__(
        self,
        auth_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._auth_token = auth_token
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    @property
    def auth_token(self) -> Optional[str]:
        return self._auth_token

    def prepare_request(self, endpoint: Endpoint, payload: RequestPayload) -> httpx.Request:
        """
        Build the HTTP request for an endpoint.

        A payload that fails to serialize is logged and the request goes
        out without a body; the server's rejection then surfaces as a
        DecodingError.
        """
        headers = {"content-type": "application/json"}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"

        content: Optional[bytes] = None
        try:
            content = payload.to_json().encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(
                "Could not serialize %s, sending without a body: %s",
                type(payload).__name__, e,
            )

        return httpx.Request(
            endpoint.method,
            endpoint.url(self._base_url),
            headers=headers,
            content=content,
            extensions={"timeout": httpx.Timeout(self._timeout).as_dict()},
        )

    async def send(
        self,
        endpoint: Endpoint,
        payload: RequestPayload,
        response_type: Type[R],
    ) -> R:
        """
        Send one request and decode its response.

        Args:
            endpoint: Where to send the request
            payload: Request body model
            response_type: Model the response body must decode into

        Returns:
            The decoded response

        Raises:
            TransportError: The network stack failed before a response arrived
            DecodingError: The response body did not match response_type
        """
        request = self.prepare_request(endpoint, payload)
        start_time = time.time()

        logger.debug(
            "OpenAI request: %s %s, payload=%s",
            request.method, request.url, type(payload).__name__,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.send(request)
        except httpx.HTTPError as e:
            latency_ms = int((time.time() - start_time) * 1000)
            logger.error("OpenAI transport error after %dms: %s", latency_ms, e)
            raise TransportError(e) from e

        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            "OpenAI response: status=%d, latency=%dms, len=%d",
            response.status_code, latency_ms, len(response.content),
        )

        return self.decode(response, response_type)

    @staticmethod
    def decode(response: httpx.Response, response_type: Type[R]) -> R:
        """Decode a response body, raising DecodingError on any mismatch."""
        body = response.content
        if not body:
            logger.warning("OpenAI returned an empty body (HTTP %d)", response.status_code)
            raise EmptyResponseError(status_code=response.status_code)

        try:
            return response_type.model_validate_json(body)
        except ValidationError as e:
            api_message = _api_error_message(body)
            logger.warning(
                "Could not decode %s (HTTP %d): %s",
                response_type.__name__, response.status_code, api_message or e,
            )
            raise DecodingError(
                e,
                status_code=response.status_code,
                body=body,
                api_message=api_message,
            ) from e


def _api_error_message(body: bytes) -> Optional[str]:
    """Pull the message out of an API error envelope, if the body is one."""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None
