"""
Shared test fixtures for pytest
"""
import io
import threading

import pytest

from todo_agent.config import AppConfig, DeliveryConfig, LLMConfig, MailgunConfig


class BlockingStream:
    """Line source that serves canned lines, then blocks like an idle terminal."""

    def __init__(self, lines=()):
        self._lines = list(lines)
        self.exhausted = threading.Event()
        self.release = threading.Event()

    def readline(self):
        if self._lines:
            return self._lines.pop(0)
        self.exhausted.set()
        self.release.wait(timeout=5)
        return ""


@pytest.fixture
def mailgun_config():
    return MailgunConfig(
        person="Jane Doe",
        email="todo@mg.example.com",
        domain="mg.example.com",
        api_key="key-test",
        api_base="https://api.mailgun.net/v3",
        inbox="jane@example.com",
    )


@pytest.fixture
def llm_config():
    return LLMConfig(
        provider="openai",
        api_key="sk-test",
        model="gpt-4o-mini",
        base_url=None,
        max_tokens=300,
        temperature=0.7,
    )


@pytest.fixture
def app_config(mailgun_config):
    return AppConfig(
        mailgun=mailgun_config,
        llm=None,
        delivery=DeliveryConfig(),
    )


@pytest.fixture
def terminal_out():
    return io.StringIO()


@pytest.fixture
def make_stream():
    """Factory for BlockingStream; releases every blocked reader on teardown."""
    streams = []

    def _make(*lines):
        stream = BlockingStream(lines)
        streams.append(stream)
        return stream

    yield _make
    for stream in streams:
        stream.release.set()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials and .env files out of the tests."""
    for key in (
        "MAILGUN_APIKEY", "OPENAI_API_KEY", "TODO_CONFIG", "LLM_PROVIDER",
        "LLM_MODEL", "LLM_BASE_URL", "LLM_MAX_TOKENS", "LLM_TEMPERATURE",
        "LLM_STREAM", "LLM_TIMEOUT", "DELIVERY_TIMEOUT", "DELIVERY_BACKOFF",
        "DELIVERY_MAX_ATTEMPTS", "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("todo_agent.config.load_dotenv", lambda *a, **kw: False)
    monkeypatch.setattr("todo_agent.main.load_dotenv", lambda *a, **kw: False)
