"""
Model invocation adapter - Gemini via the Google Gen AI SDK.

Both delivery modes implement one capability, GenerationTransport:

    generate(prompt: PromptPair) -> AsyncIterator[str]

- BufferedGeminiTransport awaits the full completion and yields it once.
- StreamingGeminiTransport yields text chunks in the order the provider
  emits them. The iterator is single-pass and cannot be restarted.

Prompt composition, the degraded-mode gate and response resolution are shared
by both modes; only this adapter differs.

Failure policy:
- Any SDK, transport or timeout error becomes UpstreamError
- Nothing is retried here; retry policy belongs to the caller
- An error after chunks were delivered is still terminal: the stream ends
  with UpstreamError and the delivered text is not retracted
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Optional

from google import genai
from google.genai import types

from spots_backend.agents.recommendation.types import PromptPair
from spots_backend.config import settings
from spots_backend.utils.errors import UpstreamError

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None


def _get_gemini_client():
    """
    Lazy initialization of the Gemini client.

    Returns None when no live key is configured; callers are expected to have
    taken the degraded-mode path before reaching this point.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.has_live_provider_key:
        logger.warning(
            "GOOGLE_API_KEY not configured. AI endpoints serve mock data. "
            "Set GOOGLE_API_KEY in your .env file to call Gemini."
        )
        return None

    http_options = None
    if settings.GEMINI_TIMEOUT_MS > 0:
        http_options = types.HttpOptions(timeout=settings.GEMINI_TIMEOUT_MS)

    _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY, http_options=http_options)
    logger.info(f"Gemini client initialized for model={settings.GEMINI_MODEL}")
    return _gemini_client


def _upstream_error(exc: Exception) -> UpstreamError:
    """Wrap a provider failure, scrubbing the API key from the message."""
    message = str(exc) or exc.__class__.__name__
    key = settings.GOOGLE_API_KEY
    if key:
        message = message.replace(key, "***")
    return UpstreamError(message)


class GenerationTransport(ABC):
    """Capability: turn a PromptPair into a forward-only sequence of text."""

    mode: str = ""

    @abstractmethod
    def generate(self, prompt: PromptPair) -> AsyncIterator[str]:
        """Yield the completion text for prompt."""


class _GeminiTransport(GenerationTransport):
    """Shared request configuration for both Gemini delivery modes."""

    def __init__(
        self,
        client: Any = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ):
        self._client = client
        self.model = model or settings.GEMINI_MODEL
        self.temperature = settings.GEMINI_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or settings.GEMINI_MAX_OUTPUT_TOKENS

    def _get_client(self):
        client = self._client if self._client is not None else _get_gemini_client()
        if client is None:
            raise UpstreamError("Gemini client is not configured")
        return client

    def _config(self, prompt: PromptPair) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=prompt.system_prompt,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )


class BufferedGeminiTransport(_GeminiTransport):
    """Await the whole completion, then yield it as a single chunk."""

    mode = "buffered"

    async def generate(self, prompt: PromptPair) -> AsyncIterator[str]:
        client = self._get_client()
        logger.info(f"Calling Gemini ({self.model}, buffered)")
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt.user_prompt,
                config=self._config(prompt),
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {e.__class__.__name__}")
            raise _upstream_error(e) from e

        text = response.text or ""
        logger.info(f"Gemini returned {len(text)} characters")
        yield text


class StreamingGeminiTransport(_GeminiTransport):
    """Yield text chunks as they arrive from the provider."""

    mode = "streaming"

    async def generate(self, prompt: PromptPair) -> AsyncIterator[str]:
        client = self._get_client()
        logger.info(f"Calling Gemini ({self.model}, streaming)")
        try:
            stream = await client.aio.models.generate_content_stream(
                model=self.model,
                contents=prompt.user_prompt,
                config=self._config(prompt),
            )
        except Exception as e:
            logger.error(f"Gemini stream failed to open: {e.__class__.__name__}")
            raise _upstream_error(e) from e

        delivered = 0
        try:
            async for chunk in stream:
                text = chunk.text
                if text:
                    delivered += 1
                    yield text
        except Exception as e:
            logger.error(f"Gemini stream failed after {delivered} chunk(s): {e.__class__.__name__}")
            raise _upstream_error(e) from e
        finally:
            # Runs on normal completion, on error, and when the consumer
            # closes the generator early (client disconnect).
            await _close_stream(stream)
            logger.debug(f"Gemini stream closed after {delivered} chunk(s)")


async def _close_stream(stream: Any) -> None:
    aclose = getattr(stream, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:
        logger.warning(f"Error closing Gemini stream: {e.__class__.__name__}")


async def collect_text(transport: GenerationTransport, prompt: PromptPair) -> str:
    """Drain a transport into one string (buffered callers)."""
    parts = []
    async for chunk in transport.generate(prompt):
        parts.append(chunk)
    text = "".join(parts)
    logger.info(f"Collected {len(text)} characters from {transport.mode} transport")
    return text


def get_buffered_transport() -> GenerationTransport:
    """FastAPI dependency: the buffered Gemini transport."""
    return BufferedGeminiTransport()


def get_streaming_transport() -> GenerationTransport:
    """FastAPI dependency: the streaming Gemini transport."""
    return StreamingGeminiTransport()
