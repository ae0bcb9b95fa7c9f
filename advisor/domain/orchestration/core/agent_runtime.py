from typing import TypedDict, Annotated, List, Dict, Any, Optional, Protocol, Sequence
from langgraph.graph import StateGraph, END
from langgraph.graph.message import add_messages
from langgraph.prebuilt import ToolNode, tools_condition
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, ToolMessage
from langchain_core.runnables import RunnableConfig
from langchain_core.tools import BaseTool
from pydantic import BaseModel, ConfigDict, Field
import structlog

logger = structlog.get_logger(__name__)


class ToolInvocation(BaseModel):
    """A tool call made by the model, paired with its result when one came back"""
    id: Optional[str] = None
    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    result: Optional[Any] = None


class AgentTurn(BaseModel):
    """Outcome of one delegated reasoning turn"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    messages: List[BaseMessage] = Field(default_factory=list, description="Full message trace")
    tool_calls: List[ToolInvocation] = Field(default_factory=list, description="Tool calls made during this turn")
    token_usage: int = Field(default=0, description="Tokens reported by the model for this turn")


class AgentRuntime(Protocol):
    """Anything that can run one agent turn over a message list"""

    async def invoke(self, messages: List[BaseMessage], memory: Optional[Any] = None) -> AgentTurn:
        ...


def extract_tool_invocations(messages: Sequence[BaseMessage]) -> List[ToolInvocation]:
    """Pair AIMessage tool calls with the ToolMessages answering them"""

    results = {
        message.tool_call_id: message.content
        for message in messages
        if isinstance(message, ToolMessage)
    }

    invocations = []
    for message in messages:
        if not isinstance(message, AIMessage):
            continue
        for call in message.tool_calls:
            invocations.append(ToolInvocation(
                id=call.get("id"),
                name=call["name"],
                args=call.get("args") or {},
                result=results.get(call.get("id"))
            ))

    return invocations


def count_tokens(messages: Sequence[BaseMessage]) -> int:
    """Sum the usage metadata reported on AI messages"""

    total = 0
    for message in messages:
        usage = getattr(message, "usage_metadata", None)
        if usage:
            total += usage.get("total_tokens", 0)
    return total


class AdvisorGraphState(TypedDict):
    """State for the agent graph"""
    messages: Annotated[List[BaseMessage], add_messages]


class LangGraphAgentRuntime:
    """Tool-calling agent loop built on LangGraph.

    The session's MemoryManager travels in configurable["memory"] so tools
    that need it (manage_todos) receive it explicitly for each invocation.
    """

    def __init__(self, model: BaseChatModel, tools: Sequence[BaseTool] = (), recursion_limit: int = 25):
        self.tools = list(tools)
        self.model = model.bind_tools(self.tools) if self.tools else model
        self.recursion_limit = recursion_limit
        self.workflow = self._create_workflow()

    def _create_workflow(self):
        """Create the agent/tools graph"""

        workflow = StateGraph(AdvisorGraphState)
        workflow.add_node("agent", self.agent_node)
        workflow.set_entry_point("agent")

        if self.tools:
            workflow.add_node("tools", ToolNode(self.tools))
            workflow.add_conditional_edges(
                "agent",
                tools_condition,
                {
                    "tools": "tools",
                    END: END
                }
            )
            workflow.add_edge("tools", "agent")
        else:
            workflow.add_edge("agent", END)

        return workflow.compile()

    async def agent_node(self, state: AdvisorGraphState, config: RunnableConfig) -> Dict[str, Any]:
        """Ask the model for the next step"""

        response = await self.model.ainvoke(state["messages"], config)
        logger.debug("Model responded", tool_calls=[c["name"] for c in getattr(response, "tool_calls", [])])
        return {"messages": [response]}

    async def invoke(self, messages: List[BaseMessage], memory: Optional[Any] = None) -> AgentTurn:
        """Run the graph until the model stops calling tools"""

        config: RunnableConfig = {
            "configurable": {"memory": memory},
            "recursion_limit": self.recursion_limit
        }
        result = await self.workflow.ainvoke({"messages": list(messages)}, config=config)

        trace = result["messages"]
        produced = trace[len(messages):]

        return AgentTurn(
            messages=trace,
            tool_calls=extract_tool_invocations(produced),
            token_usage=count_tokens(produced)
        )
