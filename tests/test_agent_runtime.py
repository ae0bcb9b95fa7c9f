"""Tests for the LangGraph agent runtime."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from advisor.domain.orchestration.core.agent_runtime import (
    LangGraphAgentRuntime,
    count_tokens,
    extract_tool_invocations,
)
from advisor.domain.tool.analysis.competitor import competitor_tool
from advisor.domain.tool.todo_tool import todo_tool

from .conftest import ToolCallingFakeChatModel


def tool_call(name, args, call_id):
    return {"name": name, "args": args, "id": call_id, "type": "tool_call"}


def usage(total):
    return {"input_tokens": total - 5, "output_tokens": 5, "total_tokens": total}


class TestTraceHelpers:
    """Tests for tool call extraction and token counting."""

    def test_pairs_calls_with_results(self):
        messages = [
            HumanMessage(content="hi"),
            AIMessage(content="", tool_calls=[
                tool_call("competitor_analysis", {"idea_description": "x"}, "c1"),
                tool_call("market_sizing", {"idea_description": "x"}, "c2"),
            ]),
            ToolMessage(content="competitors", tool_call_id="c1"),
        ]

        invocations = extract_tool_invocations(messages)

        assert [(i.id, i.name, i.result) for i in invocations] == [
            ("c1", "competitor_analysis", "competitors"),
            ("c2", "market_sizing", None),
        ]
        assert invocations[0].args == {"idea_description": "x"}

    def test_count_tokens_ignores_messages_without_usage(self):
        messages = [
            HumanMessage(content="hi"),
            AIMessage(content="a", usage_metadata=usage(20)),
            AIMessage(content="b"),
            AIMessage(content="c", usage_metadata=usage(7)),
        ]
        assert count_tokens(messages) == 27


class TestLangGraphAgentRuntime:
    """Tests for the agent/tools graph."""

    @pytest.mark.asyncio
    async def test_plain_reply_without_tools(self):
        model = ToolCallingFakeChatModel(messages=iter([AIMessage(content="Hello!")]))
        runtime = LangGraphAgentRuntime(model)

        turn = await runtime.invoke([SystemMessage(content="sys"), HumanMessage(content="hi")])

        assert turn.messages[-1].content == "Hello!"
        assert turn.tool_calls == []
        assert turn.token_usage == 0

    @pytest.mark.asyncio
    async def test_tool_loop_runs_until_final_answer(self):
        model = ToolCallingFakeChatModel(messages=iter([
            AIMessage(
                content="",
                tool_calls=[tool_call("competitor_analysis", {"idea_description": "AI review"}, "call_1")],
                usage_metadata=usage(30),
            ),
            AIMessage(content="Here is what I found", usage_metadata=usage(12)),
        ]))
        runtime = LangGraphAgentRuntime(model, [competitor_tool])

        turn = await runtime.invoke([HumanMessage(content="Who are my competitors?")])

        assert turn.messages[-1].content == "Here is what I found"
        assert [call.name for call in turn.tool_calls] == ["competitor_analysis"]
        assert turn.tool_calls[0].result.startswith("Competitor Analysis Complete")
        assert turn.token_usage == 42

    @pytest.mark.asyncio
    async def test_only_current_turn_is_reported(self):
        """Tool calls and usage already in the input history are not counted again."""
        history = [
            HumanMessage(content="earlier"),
            AIMessage(
                content="",
                tool_calls=[tool_call("competitor_analysis", {"idea_description": "x"}, "old")],
                usage_metadata=usage(100),
            ),
            ToolMessage(content="old result", tool_call_id="old"),
            AIMessage(content="earlier answer"),
            HumanMessage(content="thanks"),
        ]
        model = ToolCallingFakeChatModel(messages=iter([AIMessage(content="welcome", usage_metadata=usage(9))]))
        runtime = LangGraphAgentRuntime(model, [competitor_tool])

        turn = await runtime.invoke(history)

        assert turn.tool_calls == []
        assert turn.token_usage == 9
        assert len(turn.messages) == len(history) + 1

    @pytest.mark.asyncio
    async def test_memory_reaches_tools(self, memory):
        model = ToolCallingFakeChatModel(messages=iter([
            AIMessage(content="", tool_calls=[tool_call(
                "manage_todos",
                {"todos": [{
                    "content": "Analyze competitors",
                    "activeForm": "Analyzing competitors",
                    "status": "in_progress",
                    "priority": "high",
                }]},
                "call_todo",
            )]),
            AIMessage(content="Started"),
        ]))
        runtime = LangGraphAgentRuntime(model, [todo_tool])

        turn = await runtime.invoke([HumanMessage(content="Plan the analysis")], memory=memory)

        assert memory.get_current_todo().content == "Analyze competitors"
        assert turn.tool_calls[0].result.startswith("Todo List Updated")
