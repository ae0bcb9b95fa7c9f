from typing import Any, Callable, Dict, Optional, Type
import inspect
import json
import time

from langchain_core.runnables import RunnableConfig
from langchain_core.tools import StructuredTool
from pydantic import BaseModel

from advisor.infrastructure.observability.logging import agent_logger


def memory_from_config(config: Optional[RunnableConfig]) -> Optional[Any]:
    """MemoryManager passed by the runtime through configurable["memory"]"""

    if not config:
        return None
    return (config.get("configurable") or {}).get("memory")


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return str(value)


def serialize_result(result: Any) -> str:
    """Render a raw tool result as JSON text"""

    return json.dumps(result, indent=2, ensure_ascii=False, default=_json_default)


def create_tool(
    name: str,
    description: str,
    args_schema: Type[BaseModel],
    execute: Callable[..., Any],
    format_result: Optional[Callable[[Any], str]] = None
) -> StructuredTool:
    """Wrap a plain function as a LangChain tool with logging and error capture.

    Failures never propagate into the agent loop: they are logged and returned
    to the model as a JSON error payload. If execute accepts a ``memory``
    keyword it receives the session's MemoryManager from the runnable config.
    """
    wants_memory = "memory" in inspect.signature(execute).parameters

    def run_tool(config: RunnableConfig, **kwargs: Any) -> str:
        started = time.perf_counter()
        input_data: Dict[str, Any] = {
            key: value.model_dump(mode="json") if isinstance(value, BaseModel) else value
            for key, value in kwargs.items()
        }

        try:
            if wants_memory:
                kwargs["memory"] = memory_from_config(config)

            result = execute(**kwargs)
            output = format_result(result) if format_result else serialize_result(result)

            agent_logger.log_tool_execution(
                tool_name=name,
                input_data=input_data,
                duration_ms=(time.perf_counter() - started) * 1000
            )
            return output

        except Exception as e:
            agent_logger.log_tool_execution(
                tool_name=name,
                input_data=input_data,
                duration_ms=(time.perf_counter() - started) * 1000,
                success=False,
                error=str(e)
            )
            return json.dumps({"error": str(e), "tool": name}, ensure_ascii=False)

    return StructuredTool.from_function(
        func=run_tool,
        name=name,
        description=description,
        args_schema=args_schema
    )
