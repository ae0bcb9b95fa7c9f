from typing import Dict, List, Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
from enum import Enum

from .todo import Todo


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdeaStage(str, Enum):
    """Maturity of the discussed startup idea"""
    IDEA = "idea"
    MVP = "mvp"
    LAUNCHED = "launched"


class AnalysisKind(str, Enum):
    """Analyses whose results are cached in working memory"""
    COMPETITOR = "competitor"
    MARKET = "market"
    CUSTOMER = "customer"
    REPORT = "report"


class Focus(str, Enum):
    """What the conversation is currently about"""
    COMPETITOR = "competitor"
    MARKET = "market"
    CUSTOMER = "customer"
    STRATEGY = "strategy"
    GENERAL = "general"


class IdeaContext(BaseModel):
    """Accumulated facts about the startup idea under discussion"""
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = None
    category: Optional[str] = None
    target_market: Optional[str] = Field(None, alias="targetMarket")
    key_features: Optional[List[str]] = Field(None, alias="keyFeatures")
    stage: Optional[IdeaStage] = None


class AnalysisCacheEntry(BaseModel):
    """Cached analysis result"""
    data: Any = None
    timestamp: datetime = Field(default_factory=utcnow)


class WorkingMemory(BaseModel):
    """Everything the agent should remember about the current session"""
    idea: Optional[IdeaContext] = None
    analyses: Dict[AnalysisKind, AnalysisCacheEntry] = Field(default_factory=dict)
    current_focus: Optional[Focus] = None
    recommendations: List[str] = Field(default_factory=list)
    user_concerns: List[str] = Field(default_factory=list)
    todos: List[Todo] = Field(default_factory=list)


class ConversationContext(BaseModel):
    """Complete per-session record"""
    session_id: str
    created_at: datetime = Field(default_factory=utcnow)
    last_updated_at: datetime = Field(default_factory=utcnow)
    working_memory: WorkingMemory = Field(default_factory=WorkingMemory)
    token_count: int = Field(default=0, description="Advisory token usage, never enforced")
