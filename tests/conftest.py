"""Shared fixtures: in-memory storage, failing storage, fake LLM client, API client."""

from typing import Any, Optional

import pytest

from domains.core import StorageUnavailableError, get_service_registry, reset_service_registry
from domains.workspace_core.llm import LLMReply
from domains.workspace_core.storage import KeyValueBackend, MemoryBackend, PersistenceGateway


class FlakyBackend(MemoryBackend):
    """Memory backend whose reads/writes can be switched off."""

    name = "flaky"

    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageUnavailableError(key, "reads disabled")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageUnavailableError(key, "quota exceeded")
        self.writes += 1
        super().set(key, value)


class FakeLLMClient:
    """Stands in for LLMClient; records the messages it receives."""

    def __init__(self, text: str = "Hello from the assistant", tool_calls: Optional[list] = None):
        self.is_configured = True
        self.text = text
        self.tool_calls = tool_calls or []
        self.calls: list[list[dict[str, Any]]] = []

    async def achat(self, messages, profile=None, temperature=None, caller=""):
        self.calls.append(messages)
        return LLMReply(text=self.text, tool_calls=list(self.tool_calls))


@pytest.fixture
def backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture
def gateway(backend: KeyValueBackend) -> PersistenceGateway:
    return PersistenceGateway(backend)


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def api_client(fake_llm):
    from fastapi.testclient import TestClient

    from app.main import app

    reset_service_registry()
    registry = get_service_registry()
    registry.set("storage_gateway", PersistenceGateway(MemoryBackend()))
    registry.set("llm_client", fake_llm)

    with TestClient(app) as client:
        yield client

    reset_service_registry()
