"""Shared fixtures for advisor tests."""

from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, BaseMessage

from advisor.domain.context.memory_manager import MemoryManager
from advisor.domain.orchestration.core.agent_runtime import AgentTurn, ToolInvocation


class FakeClock:
    """Controllable clock for TTL and timestamp tests."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class ToolCallingFakeChatModel(GenericFakeChatModel):
    """Scripted chat model that accepts tool binding."""

    def bind_tools(self, tools: Any, **kwargs: Any) -> "ToolCallingFakeChatModel":
        return self


class ScriptedRuntime:
    """AgentRuntime double returning a fixed reply and tool calls."""

    def __init__(
        self,
        reply: str = "ok",
        tool_calls: Optional[List[ToolInvocation]] = None,
        token_usage: int = 0,
    ):
        self.reply = reply
        self.tool_calls = tool_calls or []
        self.token_usage = token_usage
        self.calls: List[tuple] = []

    async def invoke(self, messages: List[BaseMessage], memory: Optional[Any] = None) -> AgentTurn:
        self.calls.append((list(messages), memory))
        return AgentTurn(
            messages=[*messages, AIMessage(content=self.reply)],
            tool_calls=self.tool_calls,
            token_usage=self.token_usage,
        )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory(clock: FakeClock) -> MemoryManager:
    return MemoryManager("test-session", clock=clock)
