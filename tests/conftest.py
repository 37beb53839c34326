"""
Shared pytest fixtures for openai_kit.

The network is simulated with httpx.MockTransport: tests hand a request
handler to `make_client` and get back a client whose every call is served
by that handler.
"""

import json
from typing import Callable, Dict, List

import httpx
import pytest

from openai_kit import OpenAIClient, get_settings

TEST_TOKEN = "sk-test-token"


# ===== ENVIRONMENT =====


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ===== RESPONSE BODIES =====


@pytest.fixture
def completion_body() -> Dict:
    """A typical /v1/completions response with a single choice."""
    return {
        "id": "cmpl-123",
        "object": "text_completion",
        "created": 1675000000,
        "model": "text-davinci-003",
        "choices": [
            {"text": "\n\nThis is indeed a test", "index": 0, "finish_reason": "length"}
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12},
    }


@pytest.fixture
def edit_body() -> Dict:
    """Edits responses carry no id and no model echo."""
    return {
        "object": "edit",
        "created": 1675000000,
        "choices": [{"text": "birds can fly\n", "index": 0}],
        "usage": {"prompt_tokens": 25, "completion_tokens": 28, "total_tokens": 53},
    }


@pytest.fixture
def chat_body() -> Dict:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": "gpt-3.5-turbo-0301",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hello there, how may I help?"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 9, "completion_tokens": 12, "total_tokens": 21},
    }


@pytest.fixture
def image_body() -> Dict:
    return {
        "created": 1589478378,
        "data": [{"url": "https://example.com/image-1.png"}],
    }


# ===== CLIENT FIXTURES =====


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Every request that reached the mock transport, in order."""
    return []


@pytest.fixture
def make_client(sent_requests) -> Callable[..., OpenAIClient]:
    """Build a client whose requests are answered by `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> OpenAIClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        kwargs.setdefault("auth_token", TEST_TOKEN)
        return OpenAIClient(transport=httpx.MockTransport(recording_handler), **kwargs)

    return factory


def json_responder(body: Dict, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler that always answers with the given JSON body."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return handler


def request_json(request: httpx.Request) -> Dict:
    return json.loads(request.content)
