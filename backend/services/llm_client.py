"""LLM Client for Groq chat completions."""
import time
from dataclasses import dataclass
from typing import List, Optional, Dict, Any, Sequence
from groq import Groq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from config import GROQ_API_KEY, CHAT_MODEL, MAX_TOKENS, TEMPERATURE
from errors import ProviderError
from models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from a chat completion."""
    text: str
    tokens_input: int
    tokens_output: int
    latency_ms: int
    model_used: str


@dataclass
class LLMError:
    """Structured error response from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any]


class LLMClientError(ProviderError):
    """Provider failure with structured error information."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class LLMClient:
    """Client for interfacing with the Groq API for chat completions."""

    def __init__(self, api_key: Optional[str] = None, model: str = CHAT_MODEL):
        """
        Initialize LLM client with Groq API key.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
            model: Default chat model name
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.model = model
        self.client = Groq(api_key=self.api_key)
        logger.info(f"LLMClient initialized with model {model}")

    def complete(
        self,
        messages: Sequence[ConversationTurn],
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
        model: Optional[str] = None
    ) -> LLMResponse:
        """
        Run a chat completion over an ordered message list.

        Args:
            messages: Ordered turns, starting with the system turn
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            model: Override of the default model

        Returns:
            LLMResponse; ``text`` is empty when the provider returned no content

        Raises:
            LLMClientError: Structured error with code, message, and details
        """
        model = model or self.model
        start_time = time.time()

        try:
            logger.debug(f"Requesting completion: model={model}, messages={len(messages)}")

            response = self.client.chat.completions.create(
                model=model,
                messages=[turn.to_message() for turn in messages],
                max_tokens=max_tokens,
                temperature=temperature
            )
        except RateLimitError as e:
            raise self._error(
                "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                model, start_time, e, retry_after=60
            )
        except AuthenticationError as e:
            raise self._error(
                "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key.",
                model, start_time, e
            )
        except APITimeoutError as e:
            raise self._error(
                "TIMEOUT_ERROR",
                "Request timed out. Please try again.",
                model, start_time, e
            )
        except APIError as e:
            raise self._error("API_ERROR", f"Groq API error: {e}", model, start_time, e)
        except Exception as e:
            raise self._error(
                "UNKNOWN_ERROR",
                f"Unexpected error during completion: {e}",
                model, start_time, e, error_type=type(e).__name__
            )

        latency_ms = int((time.time() - start_time) * 1000)

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""

        usage = getattr(response, "usage", None)
        tokens_input = getattr(usage, "prompt_tokens", 0) or 0
        tokens_output = getattr(usage, "completion_tokens", 0) or 0

        logger.info(
            f"Completion finished: model={model}, "
            f"input_tokens={tokens_input}, output_tokens={tokens_output}, "
            f"latency={latency_ms}ms",
            extra={"model": model}
        )

        return LLMResponse(
            text=text,
            tokens_input=tokens_input,
            tokens_output=tokens_output,
            latency_ms=latency_ms,
            model_used=model
        )

    def _error(
        self,
        code: str,
        message: str,
        model: str,
        start_time: float,
        cause: Exception,
        **details: Any
    ) -> LLMClientError:
        latency_ms = int((time.time() - start_time) * 1000)
        error = LLMError(
            code=code,
            message=message,
            details={
                "model": model,
                "latency_ms": latency_ms,
                "original_error": str(cause),
                **details
            }
        )
        logger.error(
            f"{code}: model={model}, latency={latency_ms}ms, error={cause}",
            exc_info=True,
            extra={"error_code": error.code, "error_details": error.details}
        )
        return LLMClientError(error)
