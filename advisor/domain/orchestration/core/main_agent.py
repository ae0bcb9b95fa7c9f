from typing import List, Dict, Any, Optional, Sequence
import asyncio
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.tools import BaseTool
import structlog

from advisor.domain.context.extractor import (
    UserIntent, detect_user_intent, extract_idea_from_message, extract_user_concerns
)
from advisor.domain.context.memory_manager import MemoryManager
from advisor.domain.models.conversation import AnalysisKind, Focus
from advisor.domain.tool.tool_registry import TOOL_ANALYSIS_KINDS, ToolRegistry
from advisor.infrastructure.config.settings import AdvisorSettings, create_chat_model, get_settings
from advisor.infrastructure.observability.logging import agent_logger, bind_session
from .agent_runtime import AgentRuntime, LangGraphAgentRuntime, ToolInvocation

logger = structlog.get_logger(__name__)


ADVISOR_SYSTEM_PROMPT = """You are a helpful and insightful startup advisor AI.

Your role is to help entrepreneurs evaluate their startup ideas by:
1. Understanding their idea and extracting key details
2. Analyzing competitors, market size, and target customers
3. Providing honest, actionable feedback
4. Generating comprehensive investment evaluation reports when requested

Guidelines:
- Be friendly and encouraging, but also realistic about challenges
- Use tools when the user asks specific questions
- **IMPORTANT**: Use the CONTEXT below to avoid asking redundant questions
- Synthesize insights from multiple analyses
- Provide your expert perspective, not just tool outputs
- For multi-step work, keep the todo list current with manage_todos

Available tools:
- competitor_analysis: Analyzes competitors and competitive landscape
- market_sizing: Estimates market size (TAM/SAM/SOM) and trends
- customer_analysis: Identifies target customers and acquisition strategies
- vc_evaluation_report: Generates comprehensive VC-style investment report
- manage_todos: Tracks the task list for multi-step work
"""

INTENT_FOCUS: Dict[UserIntent, Focus] = {
    UserIntent.ASK_COMPETITOR: Focus.COMPETITOR,
    UserIntent.ASK_MARKET: Focus.MARKET,
    UserIntent.ASK_CUSTOMER: Focus.CUSTOMER,
}

INTENT_ANALYSIS_KINDS: Dict[UserIntent, AnalysisKind] = {
    UserIntent.ASK_COMPETITOR: AnalysisKind.COMPETITOR,
    UserIntent.ASK_MARKET: AnalysisKind.MARKET,
    UserIntent.ASK_CUSTOMER: AnalysisKind.CUSTOMER,
    UserIntent.ASK_REPORT: AnalysisKind.REPORT,
}


def message_text(message: BaseMessage) -> str:
    """Plain text of a message whose content may be a list of parts"""

    content = message.content
    if isinstance(content, str):
        return content

    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class ContextAwareAgent:
    """Startup advisor that keeps working memory across conversation turns.

    Each turn extracts facts from the user message, refreshes the system
    prompt with the rendered context block, delegates reasoning to the agent
    runtime and caches analysis tool results. Turns of one session never
    overlap.
    """

    def __init__(
        self,
        runtime: AgentRuntime,
        session_id: Optional[str] = None,
        memory: Optional[MemoryManager] = None,
        base_prompt: str = ADVISOR_SYSTEM_PROMPT
    ):
        self.runtime = runtime
        self.memory = memory or MemoryManager(session_id)
        self.base_prompt = base_prompt
        self.message_history: List[BaseMessage] = []
        self._turn_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[AdvisorSettings] = None,
        tools: Optional[Sequence[BaseTool]] = None,
        session_id: Optional[str] = None,
        memory: Optional[MemoryManager] = None
    ) -> "ContextAwareAgent":
        """Build an agent on the configured chat model and the default tools"""

        settings = settings or get_settings()
        if tools is None:
            tools = ToolRegistry().get_all_tools()

        runtime = LangGraphAgentRuntime(
            model=create_chat_model(settings),
            tools=tools,
            recursion_limit=settings.recursion_limit
        )
        return cls(runtime, session_id=session_id, memory=memory)

    def build_system_prompt(self) -> str:
        return self.base_prompt + self.memory.build_context_summary()

    async def chat(self, user_message: str) -> str:
        """Process one user message and return the agent's reply"""

        async with self._turn_lock:
            with bind_session(self.memory.session_id):
                self.extract_context(user_message)

                intent = detect_user_intent(user_message)
                logger.info("Detected intent", intent=intent.value)

                focus = INTENT_FOCUS.get(intent)
                if focus:
                    self.memory.set_focus(focus)

                self.check_cache_and_advise(intent)

                self.message_history.append(HumanMessage(content=user_message))
                system_message = SystemMessage(content=self.build_system_prompt())

                turn = await self.runtime.invoke(
                    [system_message, *self.message_history],
                    memory=self.memory
                )

                self.message_history = [
                    message for message in turn.messages
                    if not isinstance(message, SystemMessage)
                ]
                self.cache_tool_results(turn.tool_calls)
                self.memory.record_token_usage(turn.token_usage)

                agent_logger.log_agent_event(
                    "turn_completed",
                    "advisor",
                    self.memory.session_id,
                    {
                        "intent": intent.value,
                        "tools": [call.name for call in turn.tool_calls],
                        "tokens": turn.token_usage
                    }
                )
                logger.debug("Memory state", summary=self.memory.get_summary())

                if not self.message_history:
                    return ""
                return message_text(self.message_history[-1])

    def extract_context(self, message: str) -> None:
        """Merge idea details and concerns found in the message"""

        idea = extract_idea_from_message(message)
        if idea:
            logger.info("Extracted idea info", idea=idea)
            self.memory.update_idea(idea)

        concerns = extract_user_concerns(message)
        if concerns:
            logger.info("Detected concerns", concerns=concerns)
            for concern in concerns:
                self.memory.add_user_concern(concern)

    def check_cache_and_advise(self, intent: UserIntent) -> Optional[Any]:
        """Look up the analysis the intent asks for.

        A hit is only advisory: the agent still decides whether to call the
        tool again.
        """
        kind = INTENT_ANALYSIS_KINDS.get(intent)
        if kind is None:
            return None

        cached = self.memory.get_cached_analysis(kind)
        if cached is not None:
            logger.info("Found cached analysis", kind=kind.value)
        return cached

    def cache_tool_results(self, tool_calls: Sequence[ToolInvocation]) -> None:
        """Write analysis tool results into the cache; other tools are ignored"""

        for call in tool_calls:
            kind = TOOL_ANALYSIS_KINDS.get(call.name)
            if kind is None or call.result is None:
                continue
            self.memory.cache_analysis(kind, call.result)

    def get_memory(self) -> MemoryManager:
        return self.memory

    def get_message_history(self) -> List[BaseMessage]:
        return self.message_history

    def get_memory_summary(self) -> str:
        return self.memory.get_summary()
