"""LLM suggestions appended to TODO items."""

import logging
from typing import Optional

from .config import LLMConfig
from .exceptions import SuggestionError
from .llm_client import LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a personal assistant helping someone get through their TODO list.

You will be given a TODO item: a one-line summary, optionally followed by details.
Suggest how to get it done.

- Give at most five short, concrete steps
- Mention anything that is easy to forget
- Use plain text only (no markdown)
- Do not repeat the TODO item back"""

SUGGESTION_SEPARATOR = "\n\n---\nSuggestion:\n"


def enrich(text: str, client: Optional[LLMClient], config: Optional[LLMConfig]) -> str:
    """
    Append a generated suggestion to a TODO text.

    Best-effort: any completion failure is reported as a warning and the
    original text is returned.

    Args:
        text: The composed TODO text.
        client: LLM client instance, or None when suggestions are disabled.
        config: LLM configuration.

    Returns:
        The text with a suggestion section appended, or the text unchanged.
    """
    if client is None or config is None:
        return text

    logger.info("Asking for a suggestion...")
    try:
        suggestion = client.complete(
            SYSTEM_PROMPT,
            text,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    except SuggestionError as e:
        logger.warning(f"No suggestion added, sending the TODO as is: {e}")
        return text

    suggestion = suggestion.strip()
    if not suggestion:
        logger.info("Suggestion is empty; sending the TODO as is.")
        return text

    logger.debug(f"Suggestion: {suggestion[:200]}...")
    return text + SUGGESTION_SEPARATOR + suggestion
