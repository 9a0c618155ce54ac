"""Abstract LLM client interface."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def complete(self, system: str, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        Complete a prompt using the LLM.

        Args:
            system: Instruction framing the assistant's role.
            prompt: The user prompt to send to the LLM.
            max_tokens: Maximum number of tokens in the response.
            temperature: Sampling temperature (0.0-1.0).

        Returns:
            The LLM's response text (trimmed).

        Raises:
            SuggestionError: If the request fails or the response is malformed.
        """
        pass
