import structlog
import logging
import sys
from contextlib import contextmanager
from typing import Dict, Any, Iterator, List, Optional
import os

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "langchain_google_genai")


def build_processors(log_format: str = "console") -> List[Any]:
    """Processor chain shared by every advisor logger, renderer last"""

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    return processors


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    service_name: str = "startup-advisor"
) -> None:
    """Route structlog through stdlib logging and bind service context"""

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=build_processors(log_format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(
        service=service_name,
        environment=os.getenv("ENVIRONMENT", "development")
    )


@contextmanager
def bind_session(session_id: str) -> Iterator[None]:
    """Attach session_id to every entry logged inside the block"""

    with structlog.contextvars.bound_contextvars(session_id=session_id):
        yield


class AgentLogger:
    """Event-style logging for agents, tools and working memory"""

    def __init__(self, name: str):
        self.logger = structlog.get_logger(name)

    def log_agent_event(
        self,
        event_type: str,
        agent_name: str,
        session_id: str,
        data: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Lifecycle events (task_started, turn_completed, ...) named by event_type"""

        log = self.logger.bind(agent=agent_name, session_id=session_id)
        log.info(event_type, **{**(data or {}), **kwargs})

    def log_tool_execution(
        self,
        tool_name: str,
        input_data: Dict[str, Any],
        duration_ms: Optional[float] = None,
        success: bool = True,
        error: Optional[str] = None
    ):
        """Failed tool calls are logged at error level"""

        fields: Dict[str, Any] = {
            "tool_name": tool_name,
            "input_data": input_data,
            "duration_ms": round(duration_ms, 2) if duration_ms is not None else None,
            "success": success,
        }

        if success:
            self.logger.info("tool_execution", **fields)
        else:
            self.logger.error("tool_execution", error=error, **fields)

    def log_context_update(
        self,
        session_id: str,
        context_type: str,
        action: str,
        details: Optional[Dict[str, Any]] = None
    ):
        # Emitted on every working-memory mutation
        self.logger.debug(
            "context_update",
            session_id=session_id,
            change=f"{context_type}.{action}",
            **(details or {})
        )


agent_logger = AgentLogger("advisor")
