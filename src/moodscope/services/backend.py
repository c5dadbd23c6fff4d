"""Generative backends that turn a prompt and schema into raw JSON text."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

import openai
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.config import Settings, settings as default_settings
from ..core.errors import BackendError
from .prompts import OutputSchema

logger = logging.getLogger(__name__)


class GenerativeBackend(ABC):
    """Base contract for any remote generation capability."""

    @abstractmethod
    def generate(self, messages: Sequence[Dict[str, str]], output_schema: OutputSchema) -> str:
        """Return a JSON document conforming to ``output_schema``.

        Any failure must surface as :class:`BackendError`.
        """
        raise NotImplementedError


class OpenAIBackend(GenerativeBackend):
    """OpenAI chat completions constrained by a JSON schema response format."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        temperature: float = 0.3,
        max_tokens: int = 1200,
        max_attempts: int = 1,
        client: Optional[openai.OpenAI] = None,
    ):
        # The SDK retries on its own unless told not to; attempts are counted here instead.
        self.client = client or openai.OpenAI(api_key=api_key, max_retries=0, timeout=timeout)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_attempts = max_attempts
        logger.info(f"OpenAI backend initialized with model {model}")

    def generate(self, messages: Sequence[Dict[str, str]], output_schema: OutputSchema) -> str:
        retrying = Retrying(
            retry=retry_if_exception_type(BackendError),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1.0, max=10),
            reraise=True,
        )
        return retrying(self._complete, messages, output_schema)

    def _complete(self, messages: Sequence[Dict[str, str]], output_schema: OutputSchema) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=list(messages),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": output_schema.name,
                        "schema": output_schema.schema,
                        "strict": False,
                    },
                },
            )
        except openai.OpenAIError as e:
            raise BackendError(f"{type(e).__name__}: {e}") from e

        if not response.choices:
            raise BackendError("backend returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise BackendError("backend returned an empty response")
        return content.strip()


class OfflineBackend(GenerativeBackend):
    """Backend used when running without remote access; every call fails."""

    def __init__(self):
        logger.info("Using offline backend; analyses will use the local classifier")

    def generate(self, messages: Sequence[Dict[str, str]], output_schema: OutputSchema) -> str:
        raise BackendError("no remote backend available (offline mode)")


def create_backend(config: Optional[Settings] = None, offline: bool = False) -> GenerativeBackend:
    """Create the backend for this process.

    A missing API key is a startup error unless offline mode was requested.
    """
    config = config or default_settings
    if offline:
        return OfflineBackend()
    return OpenAIBackend(
        api_key=config.require_api_key(),
        model=config.openai_model,
        timeout=config.request_timeout,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        max_attempts=config.max_attempts,
    )
