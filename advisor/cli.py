"""
Startup Advisor CLI

Interactive multi-turn chat with the context-aware advisor, and one-shot
VC evaluation through the report sub-agent.
"""

import asyncio
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel

from advisor.domain.context.memory_manager import MemoryManager
from advisor.domain.orchestration.core.main_agent import ContextAwareAgent
from advisor.domain.orchestration.subagent.base_subagent import create_vc_report_subagent
from advisor.infrastructure.config.settings import get_settings
from advisor.infrastructure.observability.logging import setup_logging

logger = structlog.get_logger(__name__)
console = Console()

app = typer.Typer(
    name="startup-advisor",
    help="Context-aware startup advisor agents",
    add_completion=False,
)

EXIT_COMMANDS = {"/exit", "/quit"}


def _configure_logging() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.service_name)


def handle_command(command: str, memory: MemoryManager) -> Optional[str]:
    """Text for a slash command, or None if it is not one"""

    if command == "/summary":
        return memory.get_summary()
    if command == "/context":
        return memory.build_context_summary() or "(no context yet)"
    if command == "/todos":
        todos = memory.get_todos()
        if not todos:
            return "No todos"
        return "\n".join(todo.render_line(index) for index, todo in enumerate(todos, start=1))
    return None


async def conversation_loop(agent: ContextAwareAgent) -> None:
    """Read user messages until /exit and print the advisor's replies"""

    memory = agent.get_memory()
    console.print(Panel(
        f"Session: {memory.session_id}\n"
        "Commands: /summary /context /todos /exit",
        title="Startup Advisor",
        border_style="cyan",
    ))

    while True:
        try:
            user_message = console.input("[bold green]You:[/bold green] ").strip()
        except (EOFError, KeyboardInterrupt):
            break

        if not user_message:
            continue
        if user_message in EXIT_COMMANDS:
            break

        command_output = handle_command(user_message, memory)
        if command_output is not None:
            console.print(Panel(command_output, border_style="dim"))
            continue

        with console.status("Thinking..."):
            reply = await agent.chat(user_message)
        console.print(Panel(reply, title="Advisor", border_style="blue"))

    console.print(Panel(memory.get_summary(), title="Session summary", border_style="cyan"))


@app.command()
def chat(
    session_id: Optional[str] = typer.Option(None, "--session-id", "-s", help="Session id to use"),
) -> None:
    """Start an interactive advisor conversation."""
    _configure_logging()
    agent = ContextAwareAgent.from_settings(session_id=session_id)
    logger.info("Starting conversation", session_id=agent.get_memory().session_id)
    asyncio.run(conversation_loop(agent))


@app.command()
def report(
    idea: str = typer.Argument(..., help="Startup idea to evaluate"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds before giving up"),
) -> None:
    """Generate a VC evaluation report with the report sub-agent."""
    _configure_logging()
    subagent = create_vc_report_subagent()

    with console.status("Evaluating..."):
        result = asyncio.run(subagent.execute(
            f"Produce a complete VC evaluation report for this startup idea: {idea}",
            timeout=timeout,
        ))

    if not result.success:
        console.print(f"[red]Evaluation failed:[/red] {result.error}")
        raise typer.Exit(code=1)

    console.print(Panel(
        result.data or "",
        title=f"VC Report ({', '.join(result.tools_called) or 'no tools'})",
        border_style="green",
    ))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
