"""
LLM providers and model selection.

This module provides the OpenAI-backed client used by the plan advisor:
- Two model types (fast for per-workout coaching, smart for full plans)
- Automatic retry with exponential backoff
- Rate limit handling
- JSON-mode completions with tolerant JSON extraction
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar
import asyncio
import json
import logging
import os
import re
import threading
import time

from openai import AsyncOpenAI, APIError, RateLimitError, APIConnectionError

from ..config import get_settings
from ..exceptions import (
    LLMServiceUnavailableError,
    LLMRateLimitError,
    LLMTimeoutError,
    LLMResponseInvalidError,
    LLMError,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")


class ModelType(Enum):
    """Model types for different task complexities."""

    FAST = "fast"    # Coaching notes for a single workout
    SMART = "smart"  # Full plan generation


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
        retryable_status_codes: Optional[set[int]] = None,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.retryable_status_codes = retryable_status_codes or {429, 500, 502, 503, 504}

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for a given attempt number."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object out of an LLM reply.

    Accepts a bare JSON document, a fenced ```json block, or an object
    embedded in surrounding prose (first '{' to last '}'). A reply that is
    valid JSON as a whole must be an object; arrays and scalars are rejected
    rather than mined for an inner object.

    Raises:
        LLMResponseInvalidError: If no JSON object can be recovered
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        pass
    else:
        if isinstance(parsed, dict):
            return parsed
        raise LLMResponseInvalidError(
            message=f"Expected a JSON object from LLM, got {type(parsed).__name__}",
            raw_response=text,
        )

    candidates = list(JSON_FENCE_PATTERN.findall(text))

    start_idx = text.find("{")
    end_idx = text.rfind("}")
    if start_idx != -1 and end_idx > start_idx:
        candidates.append(text[start_idx:end_idx + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise LLMResponseInvalidError(
        message="Could not parse a JSON object from LLM response",
        raw_response=text,
    )


class LLMClient:
    """
    OpenAI client wrapper with model routing, retry logic, and error handling.

    All failures surface as LLMError subclasses so callers only need to
    catch one family of exceptions.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        """
        Initialize the LLM client.

        Args:
            api_key: OpenAI API key (defaults to settings or env var)
            retry_config: Configuration for retry behavior

        Raises:
            LLMServiceUnavailableError: If no API key is configured
        """
        settings = get_settings()
        api_key = api_key or settings.openai_api_key or os.environ.get("OPENAI_API_KEY")

        if not api_key:
            raise LLMServiceUnavailableError(
                message="OPENAI_API_KEY not configured",
                details={"configuration_missing": "openai_api_key"},
            )

        self.client = AsyncOpenAI(api_key=api_key)
        self.model_map = {
            ModelType.FAST: settings.llm_model_fast,
            ModelType.SMART: settings.llm_model_smart,
        }
        self.retry_config = retry_config or RetryConfig(max_retries=settings.llm_max_retries)
        self._logger = logger

    def get_model_name(self, model_type: ModelType = ModelType.SMART) -> str:
        """Get the model ID for a model type."""
        return self.model_map.get(model_type, self.model_map[ModelType.SMART])

    async def _execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_name: str = "LLM request",
    ) -> T:
        """
        Execute an operation with retry logic.

        Rate limits, connection errors and retryable status codes are retried
        with exponential backoff; anything else fails immediately.

        Raises:
            LLMError: On unrecoverable failure
        """
        last_exception: Optional[Exception] = None

        for attempt in range(self.retry_config.max_retries + 1):
            start_time = time.time()

            try:
                result = await operation()
                duration_ms = (time.time() - start_time) * 1000
                self._logger.debug(f"{operation_name} succeeded in {duration_ms:.0f}ms")
                return result

            except RateLimitError as e:
                last_exception = e
                retry_after = getattr(e, "retry_after", None)

                if attempt < self.retry_config.max_retries:
                    delay = retry_after if retry_after else self.retry_config.get_delay(attempt)
                    self._logger.warning(
                        f"{operation_name} rate limited. "
                        f"Retry {attempt + 1}/{self.retry_config.max_retries} "
                        f"in {delay:.1f}s"
                    )
                    await asyncio.sleep(delay)
                else:
                    raise LLMRateLimitError(retry_after=retry_after)

            except APIConnectionError as e:
                last_exception = e

                if attempt < self.retry_config.max_retries:
                    delay = self.retry_config.get_delay(attempt)
                    self._logger.warning(
                        f"{operation_name} connection error. "
                        f"Retry {attempt + 1}/{self.retry_config.max_retries} "
                        f"in {delay:.1f}s: {e}"
                    )
                    await asyncio.sleep(delay)
                else:
                    raise LLMServiceUnavailableError(
                        message=f"Connection to LLM service failed: {e}",
                    )

            except APIError as e:
                last_exception = e
                status = getattr(e, "status_code", 500)

                if status in self.retry_config.retryable_status_codes:
                    if attempt < self.retry_config.max_retries:
                        delay = self.retry_config.get_delay(attempt)
                        self._logger.warning(
                            f"{operation_name} API error (status {status}). "
                            f"Retry {attempt + 1}/{self.retry_config.max_retries} "
                            f"in {delay:.1f}s"
                        )
                        await asyncio.sleep(delay)
                    else:
                        raise LLMServiceUnavailableError(
                            message=f"LLM API error after retries: {e}",
                            details={"status_code": status},
                        )
                else:
                    raise LLMError(
                        message=f"LLM API error: {e}",
                        details={"status_code": status},
                    )

            except asyncio.TimeoutError:
                raise LLMTimeoutError()

        raise LLMError(message=f"Operation failed after all retries: {last_exception}")

    async def completion_json(
        self,
        system: str,
        user: str,
        model: ModelType = ModelType.SMART,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        timeout: Optional[float] = 60.0,
    ) -> Dict[str, Any]:
        """
        Get a JSON completion from the LLM using JSON mode.

        Args:
            system: System prompt (must mention JSON)
            user: User message
            model: Model type to use
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature
            timeout: Per-attempt timeout in seconds

        Returns:
            The parsed JSON object

        Raises:
            LLMError: On failure
            LLMResponseInvalidError: If the reply holds no JSON object
        """
        async def _make_request() -> Dict[str, Any]:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.get_model_name(model),
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": user},
                    ],
                    max_tokens=max_tokens,
                    temperature=temperature,
                    response_format={"type": "json_object"},
                ),
                timeout=timeout,
            )
            content = response.choices[0].message.content
            if content is None:
                raise LLMResponseInvalidError(message="Empty response from LLM")
            return extract_json_object(content)

        return await self._execute_with_retry(_make_request, "completion_json")


# Singleton instance with thread-safe locking
_llm_client: Optional[LLMClient] = None
_llm_client_lock = threading.Lock()


def get_llm_client() -> LLMClient:
    """
    Get the LLM client singleton (thread-safe).

    Raises:
        LLMServiceUnavailableError: If no API key is configured
    """
    global _llm_client
    if _llm_client is None:
        with _llm_client_lock:
            if _llm_client is None:
                _llm_client = LLMClient()
    return _llm_client


def reset_llm_client() -> None:
    """Reset the LLM client singleton (for testing)."""
    global _llm_client
    with _llm_client_lock:
        _llm_client = None
