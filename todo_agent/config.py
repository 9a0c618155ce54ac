"""Configuration management."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "conf.yml"
DEFAULT_API_BASE = "https://api.mailgun.net/v3"

REQUIRED_KEYS = ("email", "domain", "apikey", "inbox")


@dataclass
class MailgunConfig:
    """Mailgun sender configuration."""
    person: str     # sender display name
    email: str      # sender address
    domain: str     # Mailgun sending domain
    api_key: str    # resolved secret, not the variable name
    api_base: str
    inbox: str      # where TODOs are delivered


@dataclass
class LLMConfig:
    """LLM API configuration."""
    provider: str         # "openai" or "generic_http"
    api_key: str
    model: str
    base_url: Optional[str]  # allow custom endpoint
    max_tokens: int
    temperature: float
    stream: bool = False
    timeout: float = 30.0


@dataclass
class DeliveryConfig:
    """Retry policy for the delivery sender."""
    timeout_seconds: float = 10.0
    backoff_seconds: float = 3.0
    max_attempts: Optional[int] = None  # None retries until the send succeeds


@dataclass
class AppConfig:
    """Complete application configuration."""
    mailgun: MailgunConfig
    llm: Optional[LLMConfig]  # None disables suggestions
    delivery: DeliveryConfig


def _read_document(path: Path) -> dict:
    """Parse the YAML configuration document."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse config, err: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")
    return data


def _env_number(key: str, default: str, cast):
    value = os.getenv(key, default)
    try:
        return cast(value)
    except ValueError:
        raise ConfigError(f"invalid value for {key}: {value!r}") from None


def load_llm_config() -> Optional[LLMConfig]:
    """
    Load the completion-service configuration.

    Returns:
        The LLM configuration, or None when OPENAI_API_KEY is not set.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.debug("OPENAI_API_KEY not set; suggestions disabled.")
        return None

    return LLMConfig(
        provider=os.getenv("LLM_PROVIDER", "openai"),
        api_key=api_key,
        model=os.getenv("LLM_MODEL", "gpt-4o-mini"),
        base_url=os.getenv("LLM_BASE_URL") or None,
        max_tokens=_env_number("LLM_MAX_TOKENS", "300", int),
        temperature=_env_number("LLM_TEMPERATURE", "0.7", float),
        stream=os.getenv("LLM_STREAM", "false").lower() == "true",
        timeout=_env_number("LLM_TIMEOUT", "30", float),
    )


def load_delivery_config() -> DeliveryConfig:
    """Load the delivery retry policy from environment variables."""
    max_attempts = os.getenv("DELIVERY_MAX_ATTEMPTS")
    if max_attempts:
        max_attempts = _env_number("DELIVERY_MAX_ATTEMPTS", max_attempts, int)
        if max_attempts < 1:
            raise ConfigError("DELIVERY_MAX_ATTEMPTS must be at least 1")
    else:
        max_attempts = None

    return DeliveryConfig(
        timeout_seconds=_env_number("DELIVERY_TIMEOUT", "10", float),
        backoff_seconds=_env_number("DELIVERY_BACKOFF", "3", float),
        max_attempts=max_attempts,
    )


def load_config(path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from the YAML document and environment variables.

    The document's ``apikey`` entry names the environment variable holding
    the Mailgun secret; the secret itself never lives in the document.

    Args:
        path: Config document to read. Defaults to $TODO_CONFIG, then the
            packaged conf.yml.

    Raises:
        ConfigError: If the document is malformed or a required value is missing.
    """
    load_dotenv(find_dotenv(usecwd=True))

    config_path = Path(path or os.getenv("TODO_CONFIG") or DEFAULT_CONFIG_PATH)
    data = _read_document(config_path)

    missing = [key for key in REQUIRED_KEYS if not data.get(key)]
    if missing:
        raise ConfigError(
            f"missing required config keys in {config_path}: {', '.join(missing)}"
        )

    key_var = str(data["apikey"])
    api_key = os.getenv(key_var, "")
    if not api_key:
        raise ConfigError(f"missing mailgun API key from ${key_var}")

    mailgun = MailgunConfig(
        person=str(data.get("person") or ""),
        email=str(data["email"]),
        domain=str(data["domain"]),
        api_key=api_key,
        api_base=str(data.get("apibase") or DEFAULT_API_BASE),
        inbox=str(data["inbox"]),
    )

    return AppConfig(
        mailgun=mailgun,
        llm=load_llm_config(),
        delivery=load_delivery_config(),
    )
