"""Tests for the command line interface."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from advisor import cli
from advisor.domain.orchestration.core.main_agent import ContextAwareAgent
from advisor.domain.orchestration.subagent.base_subagent import SubAgentResult

from .conftest import ScriptedRuntime

runner = CliRunner()


def subagent_returning(result):
    subagent = MagicMock()
    subagent.execute = AsyncMock(return_value=result)
    return subagent


class TestHandleCommand:
    """Tests for slash commands."""

    def test_unknown_text_is_not_a_command(self, memory):
        assert cli.handle_command("hello", memory) is None

    def test_todos(self, memory):
        assert cli.handle_command("/todos", memory) == "No todos"
        memory.add_todo("Ship", "Shipping", "high")
        assert cli.handle_command("/todos", memory) == "  1. ⏳ Ship [HIGH]"

    def test_context_and_summary(self, memory):
        assert cli.handle_command("/context", memory) == "(no context yet)"
        assert cli.handle_command("/summary", memory).startswith("Session: test-session")


class TestConversationLoop:
    """Tests for the interactive loop."""

    @pytest.mark.asyncio
    async def test_chats_until_exit(self, memory):
        runtime = ScriptedRuntime(reply="Sounds promising")
        agent = ContextAwareAgent(runtime, memory=memory)

        with patch.object(cli.console, "input", side_effect=["", "/todos", "I want to build a SaaS", "/exit"]):
            await cli.conversation_loop(agent)

        assert len(runtime.calls) == 1
        assert memory.get_idea().category == "SaaS"

    @pytest.mark.asyncio
    async def test_eof_ends_loop(self, memory):
        agent = ContextAwareAgent(ScriptedRuntime(), memory=memory)

        with patch.object(cli.console, "input", side_effect=EOFError):
            await cli.conversation_loop(agent)

        assert agent.get_message_history() == []


class TestReportCommand:
    """Tests for the report command."""

    def test_success(self):
        result = SubAgentResult(
            task_id="vc-report_1_abcdef",
            agent_name="vc-report",
            success=True,
            data="OVERALL SCORE: 76/100",
            duration_ms=10,
            tools_called=["market_sizing"],
        )
        subagent = subagent_returning(result)

        with patch.object(cli, "setup_logging"), \
                patch.object(cli, "create_vc_report_subagent", return_value=subagent):
            outcome = runner.invoke(cli.app, ["report", "AI code review", "--timeout", "5"])

        assert outcome.exit_code == 0
        assert "OVERALL SCORE: 76/100" in outcome.output
        prompt = subagent.execute.await_args.args[0]
        assert "AI code review" in prompt
        assert subagent.execute.await_args.kwargs["timeout"] == 5

    def test_failure_exits_nonzero(self):
        result = SubAgentResult(
            task_id="vc-report_1_abcdef",
            agent_name="vc-report",
            success=False,
            error="Task timeout",
            duration_ms=10,
        )

        with patch.object(cli, "setup_logging"), \
                patch.object(cli, "create_vc_report_subagent", return_value=subagent_returning(result)):
            outcome = runner.invoke(cli.app, ["report", "AI code review"])

        assert outcome.exit_code == 1
        assert "Task timeout" in outcome.output
