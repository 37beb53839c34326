"""
OpenAI client facade.

Every operation comes in two forms:

- `send_<operation>(..., completion_handler=fn)` schedules the request on
  the running event loop and calls `fn(Result)` exactly once when it ends.
- `await <operation>(...)` wraps the callback form and returns the decoded
  response, or raises the same error the handler would have received.

Tunables are passed as keyword options and forwarded to the request model,
e.g. `max_tokens`, `temperature`, `top_probability_mass` (`top_p`),
`choices` (`n`), `stop`, `presence_penalty`, `frequency_penalty`,
`logit_bias`, `user`. Options left out are not sent.
"""
import asyncio
import functools
import logging
from typing import Any, Callable, Optional, Sequence, Set, Type, Union

import httpx

from .catalog import GPT3, Chat, Feature, ModelType, model_name
from .config import get_settings
from .endpoints import Operation, get_endpoint
from .models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    CompletionRequest,
    EditRequest,
    ImageGenerationRequest,
    ImageResponse,
    RequestPayload,
    TextResponse,
)
from .pipeline import RequestPipeline
from .result import Result

logger = logging.getLogger(__name__)

CompletionHandler = Callable[[Result[Any]], None]


class OpenAIClient:
    """Client for the OpenAI completions, edits, chat and image endpoints."""

    def __init__(
        self,
        auth_token: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            auth_token: Bearer token; falls back to OPENAI_API_KEY
            base_url: API host; falls back to OPENAI_BASE_URL
            timeout: Seconds before httpx gives up; None means no limit
            transport: Custom httpx transport (proxies, mocks)
        """
        settings = get_settings()
        self._pipeline = RequestPipeline(
            auth_token=auth_token if auth_token is not None else settings.openai_api_key,
            base_url=base_url or settings.openai_base_url,
            timeout=timeout if timeout is not None else settings.openai_timeout,
            transport=transport,
        )
        # Strong references so in-flight tasks are not garbage collected
        self._pending: Set[asyncio.Task] = set()

        logger.info("OpenAI client initialized: %s", base_url or settings.openai_base_url)

    @property
    def auth_token(self) -> Optional[str]:
        return self._pipeline.auth_token

    # --- Callback form ---

    def send_completion(
        self,
        prompt: str,
        model: ModelType = GPT3.DAVINCI,
        *,
        completion_handler: CompletionHandler,
        **options: Any,
    ) -> None:
        """
        Send a completion request.

        Args:
            prompt: Text prompt
            model: Defaults to GPT3.DAVINCI, the most capable text model
            completion_handler: Called once with a Result[TextResponse]
            **options: Tunables (max_tokens, temperature, stop, ...)
        """
        request = CompletionRequest(prompt=prompt, model=model_name(model), **options)
        self._dispatch(Operation.COMPLETIONS, request, TextResponse, completion_handler)

    def send_edits(
        self,
        instruction: str,
        model: ModelType = Feature.DAVINCI,
        input: Optional[str] = None,
        *,
        completion_handler: CompletionHandler,
        **options: Any,
    ) -> None:
        """
        Send an edit request.

        Args:
            instruction: e.g. "Fix the spelling mistakes"
            model: Defaults to Feature.DAVINCI (text-davinci-edit-001)
            input: Text to edit, e.g. "berds can fly"
            completion_handler: Called once with a Result[TextResponse]
            **options: Tunables (temperature, top_probability_mass, choices)
        """
        request = EditRequest(
            instruction=instruction,
            model=model_name(model),
            input=input,
            **options,
        )
        self._dispatch(Operation.EDITS, request, TextResponse, completion_handler)

    def send_chat(
        self,
        messages: Sequence[Union[ChatMessage, dict]],
        model: ModelType = Chat.CHATGPT,
        *,
        completion_handler: CompletionHandler,
        **options: Any,
    ) -> None:
        """
        Send a chat request.

        Args:
            messages: Conversation so far, oldest first
            model: Defaults to Chat.CHATGPT (gpt-3.5-turbo)
            completion_handler: Called once with a Result[ChatResponse]
            **options: Tunables (max_tokens, temperature, logit_bias, ...)
        """
        request = ChatRequest(messages=list(messages), model=model_name(model), **options)
        self._dispatch(Operation.CHAT, request, ChatResponse, completion_handler)

    def send_image_generation(
        self,
        prompt: str,
        *,
        completion_handler: CompletionHandler,
        **options: Any,
    ) -> None:
        """
        Send an image generation request.

        Options are `n`, `size` (an ImageSize) and `user`.
        """
        request = ImageGenerationRequest(prompt=prompt, **options)
        self._dispatch(Operation.IMAGE_GENERATIONS, request, ImageResponse, completion_handler)

    # --- Suspending form ---

    async def completion(
        self, prompt: str, model: ModelType = GPT3.DAVINCI, **options: Any
    ) -> TextResponse:
        """Send a completion request and wait for the response."""
        return await self._suspend(self.send_completion, prompt, model, **options)

    async def edits(
        self,
        instruction: str,
        model: ModelType = Feature.DAVINCI,
        input: Optional[str] = None,
        **options: Any,
    ) -> TextResponse:
        """Send an edit request and wait for the response."""
        return await self._suspend(self.send_edits, instruction, model, input, **options)

    async def chat(
        self,
        messages: Sequence[Union[ChatMessage, dict]],
        model: ModelType = Chat.CHATGPT,
        **options: Any,
    ) -> ChatResponse:
        """Send a chat request and wait for the response."""
        return await self._suspend(self.send_chat, messages, model, **options)

    async def image_generation(self, prompt: str, **options: Any) -> ImageResponse:
        """Send an image generation request and wait for the response."""
        return await self._suspend(self.send_image_generation, prompt, **options)

    # --- Internals ---

    def _dispatch(
        self,
        operation: Operation,
        request: RequestPayload,
        response_type: Type[Any],
        completion_handler: CompletionHandler,
    ) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._pipeline.send(get_endpoint(operation), request, response_type)
        )
        self._pending.add(task)
        task.add_done_callback(functools.partial(self._finish, completion_handler))

    def _finish(self, completion_handler: CompletionHandler, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            # Only happens when the loop shuts down; nobody is waiting anymore
            logger.debug("OpenAI request abandoned before completion")
            return
        error = task.exception()
        if error is not None:
            completion_handler(Result.failure(error))
        else:
            completion_handler(Result.success(task.result()))

    async def _suspend(self, send: Callable[..., None], *args: Any, **options: Any) -> Any:
        future = asyncio.get_running_loop().create_future()

        def resume(result: Result[Any]) -> None:
            # The awaiting caller may have been cancelled meanwhile
            if future.done():
                return
            if result.ok:
                future.set_result(result.value)
            else:
                future.set_exception(result.error)

        send(*args, completion_handler=resume, **options)
        return await future
