"""
Pydantic models for the OpenAI request and response bodies.

Request models serialize with the API's key names and leave out every
option the caller did not set, so the service applies its own defaults.
Response models decode strictly: a missing or mistyped field is an error,
unknown extra keys are ignored.
"""

from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class ChatRole(str, Enum):
    """Roles a chat message can be sent with."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in a chat conversation."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str


class ImageSize(str, Enum):
    SIZE_1024 = "1024x1024"
    SIZE_512 = "512x512"
    SIZE_256 = "256x256"


# --- Requests ---

class RequestPayload(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready body, keyed by wire names, unset options dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class SamplingOptions(RequestPayload):
    """Tunables shared by every text-producing endpoint."""

    temperature: Optional[float] = None
    top_probability_mass: Optional[float] = Field(default=None, alias="top_p")
    choices: Optional[int] = Field(default=None, alias="n")


class GenerationOptions(SamplingOptions):
    """Tunables accepted by the completions and chat endpoints."""

    max_tokens: Optional[int] = None
    stop: Optional[List[str]] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    # token id -> bias; JSON object keys go out as strings
    logit_bias: Optional[Dict[int, float]] = None
    user: Optional[str] = None


class CompletionRequest(GenerationOptions):
    """Body for POST /v1/completions."""

    prompt: str
    model: str


class EditRequest(SamplingOptions):
    """Body for POST /v1/edits."""

    instruction: str
    model: str
    input: Optional[str] = None


class ChatRequest(GenerationOptions):
    """Body for POST /v1/chat/completions."""

    messages: List[ChatMessage]
    model: str


class ImageGenerationRequest(RequestPayload):
    """Body for POST /v1/images/generations."""

    prompt: str
    n: int = 1
    size: ImageSize = ImageSize.SIZE_1024
    user: Optional[str] = None


# --- Responses ---

class ResponsePayload(BaseModel):
    """Base for decoded response bodies."""

    model_config = ConfigDict(frozen=True)


class Usage(ResponsePayload):
    """Token accounting reported by the API."""

    prompt_tokens: int
    completion_tokens: Optional[int] = None
    total_tokens: int


class TextChoice(ResponsePayload):
    text: str
    index: Optional[int] = None
    finish_reason: Optional[str] = None


class MessageChoice(ResponsePayload):
    message: ChatMessage
    index: Optional[int] = None
    finish_reason: Optional[str] = None


ChoiceT = TypeVar("ChoiceT", bound=ResponsePayload)


class OpenAIResponse(ResponsePayload, Generic[ChoiceT]):
    """
    Envelope shared by the completions, edits and chat endpoints.

    `object` is the API's type tag (e.g. "text_completion", "edit",
    "chat.completion"). `model` is echoed back by most endpoints but not
    all of them.
    """

    object: str
    id: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[ChoiceT]
    usage: Optional[Usage] = None


class TextResponse(OpenAIResponse[TextChoice]):
    """Response from the completions and edits endpoints."""


class ChatResponse(OpenAIResponse[MessageChoice]):
    """Response from the chat completions endpoint."""


class ImageData(ResponsePayload):
    url: str


class ImageResponse(ResponsePayload):
    """Response from the image generations endpoint."""

    created: int
    data: List[ImageData]
