"""OpenAI LLM client implementation."""

import logging
from typing import Iterable

import requests
from openai import OpenAI

from .config import LLMConfig
from .exceptions import SuggestionError
from .llm_client import LLMClient

logger = logging.getLogger(__name__)


def _build_messages(system: str, prompt: str) -> list:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": prompt},
    ]


class OpenAILLMClient(LLMClient):
    """OpenAI API client for LLM completion."""

    def __init__(self, config: LLMConfig):
        """
        Initialize the OpenAI client.

        Args:
            config: LLM configuration.
        """
        self.config = config
        self.client = OpenAI(
            api_key=config.api_key,
            base_url=config.base_url if config.base_url else None,
            timeout=config.timeout,
        )

    def complete(self, system: str, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        Complete a prompt using OpenAI's API.

        With ``config.stream`` set, partial tokens are requested and joined
        in the order they arrive.

        Returns:
            The LLM's response text (trimmed).
        """
        try:
            response = self.client.chat.completions.create(
                model=self.config.model,
                messages=_build_messages(system, prompt),
                temperature=temperature,
                max_tokens=max_tokens,
                stream=self.config.stream,
            )
            if self.config.stream:
                return self._join_stream(response).strip()
            content = response.choices[0].message.content
            if content is None:
                raise ValueError("response has no message content")
            return content.strip()
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise SuggestionError(f"OpenAI API error: {e}") from e

    @staticmethod
    def _join_stream(chunks: Iterable) -> str:
        fragments = []
        for chunk in chunks:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                fragments.append(delta)
        return "".join(fragments)


class GenericHTTPLLMClient(LLMClient):
    """Generic HTTP client for OpenAI-compatible LLM APIs."""

    def __init__(self, config: LLMConfig):
        """
        Initialize the generic HTTP client.

        Args:
            config: LLM configuration.
        """
        self.config = config
        self.base_url = (config.base_url or "https://api.openai.com/v1").rstrip("/")
        self.api_key = config.api_key
        self.model = config.model

    def complete(self, system: str, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        Complete a prompt using a generic HTTP API (OpenAI-compatible).

        Always requests a non-streamed response.

        Returns:
            The LLM's response text (trimmed).
        """
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.model,
            "messages": _build_messages(system, prompt),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.config.timeout)
            response.raise_for_status()
            data = response.json()
            return data["choices"][0]["message"]["content"].strip()
        except (requests.exceptions.RequestException, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"HTTP LLM API error: {e}")
            raise SuggestionError(f"HTTP LLM API error: {e}") from e


def create_llm_client(config: LLMConfig) -> LLMClient:
    """Create an LLM client based on configuration."""
    if config.provider == "openai":
        return OpenAILLMClient(config)
    return GenericHTTPLLMClient(config)
