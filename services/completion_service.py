"""
Completion service forwarding chat turns to the upstream completion API.
Handles input validation, temperature resolution and error translation.
"""
import asyncio
from collections.abc import Mapping
from numbers import Real
from typing import Any, Callable, Optional, Sequence

import httpx
import openai

from models.api_models import Message
from models.chat_models import UpstreamCall
from utils.constants import ErrorMessages
from utils.exceptions import InvalidRequestError, UpstreamError
from utils.logger import app_logger


class CompletionService:
    """Service issuing one single-shot completion call per chat request."""

    def __init__(
        self,
        client_provider: Callable[[], Any],
        model: str,
        default_temperature: float,
        timeout: float
    ):
        """
        Args:
            client_provider: Returns an AsyncOpenAI-compatible client. Called only
                once the request is valid, so a missing API key never blocks validation.
            model: Upstream model identifier
            default_temperature: Used when the request carries no numeric temperature
            timeout: Upper bound in seconds for the upstream call
        """
        self.client_provider = client_provider
        self.model = model
        self.default_temperature = default_temperature
        self.timeout = timeout

    @staticmethod
    def prepare_messages(messages: Optional[Sequence[Any]]) -> list[dict]:
        """
        Map inbound messages to the upstream {role, content} format.

        Raises:
            InvalidRequestError: If messages is absent, empty or malformed
        """
        if not messages or isinstance(messages, (str, bytes, Mapping)):
            raise InvalidRequestError(ErrorMessages.MESSAGES_REQUIRED)

        prepared = []
        for message in messages:
            if isinstance(message, Message):
                role, content = message.role, message.content
            elif isinstance(message, Mapping):
                role, content = message.get("role"), message.get("content")
            else:
                raise InvalidRequestError(ErrorMessages.MESSAGES_REQUIRED)

            if not isinstance(role, str) or not role or not isinstance(content, str):
                raise InvalidRequestError(ErrorMessages.MESSAGES_REQUIRED)

            prepared.append({"role": role, "content": content})

        return prepared

    def resolve_temperature(self, temperature: Any) -> float:
        """Use the requested temperature if it is a real number, otherwise the default."""
        if isinstance(temperature, Real) and not isinstance(temperature, bool):
            try:
                return float(temperature)
            except OverflowError:
                app_logger.warning("Temperature too large for a float, using default")
        return self.default_temperature

    def build_call(self, messages: Optional[Sequence[Any]], temperature: Any = None) -> UpstreamCall:
        return UpstreamCall(
            model=self.model,
            messages=self.prepare_messages(messages),
            temperature=self.resolve_temperature(temperature)
        )

    @staticmethod
    def extract_content(completion: Any) -> str:
        """
        Extract the first choice's text from a completion response.

        Returns:
            The text content, or "" when the response carries no content

        Raises:
            UpstreamError: If the response does not look like a completion at all
        """
        try:
            choices = completion.choices
            if not choices:
                return ""
            first_choice = choices[0]
        except (AttributeError, LookupError, TypeError) as e:
            raise UpstreamError(ErrorMessages.UPSTREAM_FAILURE, f"{ErrorMessages.UPSTREAM_MALFORMED}: {e!r}")

        message = getattr(first_choice, "message", None)
        content = getattr(message, "content", None)
        return content if isinstance(content, str) else ""

    @staticmethod
    def describe_upstream_failure(error: Exception) -> Any:
        """Prefer the upstream's structured error body, otherwise the failure message."""
        if isinstance(error, openai.APIStatusError) and error.body:
            return error.body
        return str(error) or error.__class__.__name__

    async def complete(self, messages: Optional[Sequence[Any]], temperature: Any = None) -> str:
        """
        Forward one chat turn upstream and return the generated text.

        Args:
            messages: Ordered chat messages, each with role and content
            temperature: Optional sampling temperature

        Returns:
            The first completion's text, "" if the upstream returned none

        Raises:
            InvalidRequestError: If messages is empty or malformed (no upstream call is made)
            UpstreamError: If the upstream call fails, times out or returns garbage
        """
        call = self.build_call(messages, temperature)
        client = self.client_provider()

        app_logger.info(
            f"Upstream call: model={call.model} messages={call.message_count} "
            f"temperature={call.temperature}"
        )

        try:
            completion = await asyncio.wait_for(
                client.chat.completions.create(**call.to_kwargs()),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            diagnostic = ErrorMessages.UPSTREAM_TIMEOUT.format(timeout=self.timeout)
            app_logger.error(f"Upstream error: {diagnostic}")
            raise UpstreamError(ErrorMessages.UPSTREAM_FAILURE, diagnostic)
        except (openai.OpenAIError, httpx.HTTPError) as e:
            diagnostic = self.describe_upstream_failure(e)
            app_logger.error(f"Upstream error ({e.__class__.__name__}): {diagnostic}")
            raise UpstreamError(ErrorMessages.UPSTREAM_FAILURE, diagnostic) from e

        content = self.extract_content(completion)
        app_logger.info(f"Upstream call completed: generated {len(content)} characters")
        return content
