"""
openai_kit - a small typed client for the OpenAI HTTP API.

- Model catalog mapping model families to their wire identifiers
- Pydantic request/response models for completions, edits, chat and images
- One request pipeline shared by every operation (httpx, no retries)
- OpenAIClient exposing each operation in callback and async form
"""

from .catalog import GPT3, Chat, Codex, CustomModel, Embedding, Feature, ModelType, model_name
from .client import OpenAIClient
from .config import Settings, configure_logging, get_settings
from .endpoints import ENDPOINTS, Endpoint, Operation, get_endpoint
from .errors import DecodingError, EmptyResponseError, OpenAIError, TransportError
from .models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatRole,
    CompletionRequest,
    EditRequest,
    ImageData,
    ImageGenerationRequest,
    ImageResponse,
    ImageSize,
    MessageChoice,
    TextChoice,
    TextResponse,
    Usage,
)
from .pipeline import RequestPipeline
from .result import Result

__all__ = [
    # Catalog
    "GPT3",
    "Codex",
    "Feature",
    "Chat",
    "Embedding",
    "CustomModel",
    "ModelType",
    "model_name",
    # Client
    "OpenAIClient",
    "RequestPipeline",
    "Result",
    # Config
    "Settings",
    "configure_logging",
    "get_settings",
    # Endpoints
    "ENDPOINTS",
    "Endpoint",
    "Operation",
    "get_endpoint",
    # Errors
    "OpenAIError",
    "TransportError",
    "DecodingError",
    "EmptyResponseError",
    # Payloads
    "ChatRole",
    "ChatMessage",
    "CompletionRequest",
    "EditRequest",
    "ChatRequest",
    "ImageSize",
    "ImageGenerationRequest",
    "TextChoice",
    "MessageChoice",
    "Usage",
    "TextResponse",
    "ChatResponse",
    "ImageData",
    "ImageResponse",
]

__version__ = "1.0.0"
