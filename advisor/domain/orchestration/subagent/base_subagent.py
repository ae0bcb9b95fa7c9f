from typing import Dict, Any, List, Optional, Callable
import asyncio
import secrets
import string
import time
from datetime import datetime
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.tools import BaseTool
from pydantic import BaseModel, ConfigDict, Field
import structlog

from advisor.domain.context.memory_manager import MemoryManager
from advisor.domain.models.conversation import utcnow
from advisor.domain.orchestration.core.agent_runtime import AgentRuntime, LangGraphAgentRuntime
from advisor.domain.orchestration.core.main_agent import message_text
from advisor.domain.tool.analysis.competitor import competitor_tool
from advisor.domain.tool.analysis.customer import customer_tool
from advisor.domain.tool.analysis.market import market_tool
from advisor.infrastructure.config.settings import create_chat_model, get_settings
from advisor.infrastructure.observability.logging import agent_logger

logger = structlog.get_logger(__name__)


class SubAgentConfig(BaseModel):
    """Everything that defines one sub-agent"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(description="Unique sub-agent name")
    description: str = Field(description="What the sub-agent is good at")
    tools: List[BaseTool] = Field(default_factory=list)
    system_prompt: str = Field(description="Role and behaviour of the sub-agent")
    isolated_memory: bool = Field(default=True, description="Use a private MemoryManager")
    shared_memory: Optional[MemoryManager] = Field(None, description="Memory shared with the main agent")
    model_name: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class SubAgentResult(BaseModel):
    """Outcome of one sub-agent task"""
    task_id: str
    agent_name: str
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    duration_ms: float
    tools_called: List[str] = Field(default_factory=list)
    steps: int = 0


class BaseSubAgent:
    """Configuration-driven sub-agent for delegated tasks"""

    def __init__(self, config: SubAgentConfig, runtime: Optional[AgentRuntime] = None):
        self.config = config
        self.name = config.name
        self.description = config.description
        self.runtime = runtime
        self.created_at = utcnow()
        self.last_active = utcnow()

        if config.isolated_memory or config.shared_memory is None:
            self.memory = MemoryManager(f"subagent-{config.name}")
        else:
            self.memory = config.shared_memory

        logger.info(
            "Sub-agent created",
            agent_name=self.name,
            shared_memory=self.memory is config.shared_memory
        )

    def initialize(self) -> None:
        """Create the agent runtime on first use"""

        if self.runtime is not None:
            return

        settings = get_settings()
        overrides = {
            "model_name": self.config.model_name,
            "temperature": self.config.temperature,
            "max_output_tokens": self.config.max_tokens,
        }
        model = create_chat_model(settings, **{k: v for k, v in overrides.items() if v is not None})
        self.runtime = LangGraphAgentRuntime(model, self.config.tools, settings.recursion_limit)

        logger.info("Sub-agent initialized", agent_name=self.name, tools=[t.name for t in self.config.tools])

    def is_initialized(self) -> bool:
        return self.runtime is not None

    async def execute(
        self,
        prompt: str,
        timeout: Optional[float] = None,
        on_complete: Optional[Callable[[SubAgentResult], None]] = None
    ) -> SubAgentResult:
        """
        Run one task.

        Failures and timeouts are reported in the result instead of raised.

        Args:
            prompt: Task description for the sub-agent
            timeout: Seconds before the task is abandoned (default from settings)
            on_complete: Called with the result when the task finishes

        Returns:
            SubAgentResult describing the outcome
        """
        self.initialize()
        self.update_activity()

        task_id = self._generate_task_id()
        if timeout is None:
            timeout = get_settings().subagent_timeout_seconds
        started = time.perf_counter()

        agent_logger.log_agent_event("task_started", self.name, self.memory.session_id, {"task_id": task_id})

        messages = [SystemMessage(content=self.config.system_prompt), HumanMessage(content=prompt)]

        try:
            turn = await asyncio.wait_for(self.runtime.invoke(messages, memory=self.memory), timeout)
            produced = turn.messages[len(messages):]

            result = SubAgentResult(
                task_id=task_id,
                agent_name=self.name,
                success=True,
                data=message_text(turn.messages[-1]) if turn.messages else None,
                duration_ms=self._elapsed_ms(started),
                tools_called=list(dict.fromkeys(call.name for call in turn.tool_calls)),
                steps=len(produced)
            )

        except asyncio.TimeoutError:
            result = self._failure(task_id, "Task timeout", started)
        except Exception as e:
            result = self._failure(task_id, str(e), started)

        agent_logger.log_agent_event(
            "task_completed" if result.success else "task_failed",
            self.name,
            self.memory.session_id,
            {"task_id": task_id, "duration_ms": result.duration_ms, "error": result.error}
        )

        if on_complete:
            on_complete(result)
        return result

    async def execute_batch(self, prompts: List[str]) -> List[SubAgentResult]:
        """Run several tasks one after another"""

        results = []
        for prompt in prompts:
            results.append(await self.execute(prompt))
        return results

    def update_activity(self):
        """Update last activity timestamp"""
        self.last_active = utcnow()

    def get_info(self) -> Dict[str, Any]:
        """Get agent information"""
        return {
            "name": self.name,
            "description": self.description,
            "tools": [tool.name for tool in self.config.tools],
            "isolated_memory": self.memory is not self.config.shared_memory,
            "created_at": self.created_at.isoformat(),
            "last_active": self.last_active.isoformat()
        }

    def get_memory(self) -> MemoryManager:
        return self.memory

    def _failure(self, task_id: str, error: str, started: float) -> SubAgentResult:
        logger.error("Sub-agent task failed", agent_name=self.name, task_id=task_id, error=error)
        return SubAgentResult(
            task_id=task_id,
            agent_name=self.name,
            success=False,
            error=error,
            duration_ms=self._elapsed_ms(started)
        )

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return (time.perf_counter() - started) * 1000

    def _generate_task_id(self) -> str:
        suffix = "".join(secrets.choice(string.ascii_lowercase + string.digits) for _ in range(6))
        return f"{self.name}_{int(datetime.now().timestamp() * 1000)}_{suffix}"


VC_REPORT_SYSTEM_PROMPT = """You are a VC evaluation expert specializing in startup assessment and investment recommendations.

## Your Methodology

### Step 1: Gather Intelligence
- Competitive Landscape: competitors, positioning and differentiation opportunities
- Market Opportunity: market size (TAM/SAM/SOM), growth trends and dynamics
- Customer Insights: target segments, pain points and acquisition channels

### Step 2: Synthesize & Score
- Overall Score: 1-100 rating with clear justification
- Dimension scores, SWOT analysis and key risks
- Investment Recommendation: Strong Pass / Pass / Maybe / No

### Step 3: Deliver Report
Executive summary, detailed analysis, scoring breakdown, SWOT, investment thesis and next steps.

Base conclusions on data, make your reasoning transparent and give concrete next steps."""


def create_vc_report_subagent(
    shared_memory: Optional[MemoryManager] = None,
    runtime: Optional[AgentRuntime] = None
) -> BaseSubAgent:
    """Build the VC evaluation expert; shares memory with the caller when given"""

    config = SubAgentConfig(
        name="vc-report",
        description=(
            "Expert in comprehensive VC evaluation reports. Use for a complete startup "
            "assessment with an investment recommendation."
        ),
        tools=[competitor_tool, market_tool, customer_tool],
        system_prompt=VC_REPORT_SYSTEM_PROMPT,
        isolated_memory=shared_memory is None,
        shared_memory=shared_memory
    )
    return BaseSubAgent(config, runtime=runtime)
