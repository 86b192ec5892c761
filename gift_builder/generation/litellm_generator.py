"""LiteLLM-backed text generation.

LiteLLM exposes 100+ providers behind the OpenAI-compatible
``completion()`` call; the model string selects the provider, e.g.
``gemini/gemini-2.5-flash`` or ``openai/gpt-4o-mini``.
"""

import logging
import threading
from typing import Any, Optional

import litellm

from gift_builder.errors import (
    ExternalServiceError,
    GenerationCancelledError,
    GenerationTimeoutError,
)
from gift_builder.settings import settings

logger = logging.getLogger(__name__)


def _extract_text(response: Any) -> str:
    """Pull the first choice's text out of an OpenAI-compatible response."""
    try:
        return response.choices[0].message.content or ""
    except (AttributeError, IndexError, TypeError):
        return ""


class LiteLLMGenerator:
    """Generates text or JSON for a prompt through ``litellm.completion``.

    Parameters
    ----------
    model : str, optional
        LiteLLM model string. Defaults to ``settings.ai_model``.
    timeout : float, optional
        Seconds before the call fails with :class:`GenerationTimeoutError`.
        Defaults to ``settings.ai_timeout`` (30s).
    temperature, top_p : float
        Sampling parameters.
    max_tokens : int
        Upper bound on the answer length.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: float = 0.7,
        top_p: float = 0.95,
        max_tokens: int = 1024,
    ) -> None:
        self.model = model or settings.ai_model
        self.timeout = timeout if timeout is not None else settings.ai_timeout
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

    def generate(
        self,
        prompt: str,
        want_json: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """Return the model's answer to ``prompt``.

        Parameters
        ----------
        prompt : str
            The user prompt.
        want_json : bool
            Ask the provider for a JSON object instead of plain text.
        cancel_event : threading.Event, optional
            If set before the answer is handed back, the answer is dropped
            and :class:`GenerationCancelledError` is raised.

        Raises
        ------
        GenerationTimeoutError
            The provider did not answer within ``timeout`` seconds.
        GenerationCancelledError
            ``cancel_event`` was set.
        ExternalServiceError
            Any other provider failure, or an empty answer.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelledError("Generation cancelled")

        kwargs: dict = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
        }
        if want_json:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = litellm.completion(**kwargs)
        except litellm.Timeout as e:
            logger.warning("Generation timed out after %ss (%s)", self.timeout, self.model)
            raise GenerationTimeoutError(
                "Request timeout - please try again",
                context={"model": self.model, "timeout": self.timeout},
            ) from e
        except Exception as e:
            logger.warning("Generation failed (%s): %s", self.model, e)
            raise ExternalServiceError(
                str(e) or "AI generation failed. Please try again.",
                context={"model": self.model},
            ) from e

        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelledError("Generation cancelled")

        text = _extract_text(response)
        if not text:
            raise ExternalServiceError(
                "No response from AI. Please try again.", context={"model": self.model}
            )
        return text
