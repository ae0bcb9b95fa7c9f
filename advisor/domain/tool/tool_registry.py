from typing import Dict, List, Optional

from langchain_core.tools import BaseTool

from advisor.domain.models.conversation import AnalysisKind
from .analysis.competitor import competitor_tool
from .analysis.customer import customer_tool
from .analysis.market import market_tool
from .analysis.vc_report import vc_report_tool
from .todo_tool import todo_tool

# Tool results that are cached in working memory, by tool name
TOOL_ANALYSIS_KINDS: Dict[str, AnalysisKind] = {
    "competitor_analysis": AnalysisKind.COMPETITOR,
    "market_sizing": AnalysisKind.MARKET,
    "customer_analysis": AnalysisKind.CUSTOMER,
    "vc_evaluation_report": AnalysisKind.REPORT,
}


class ToolRegistry:
    """Registry for managing available tools"""

    def __init__(self, register_defaults: bool = True):
        self.tools: Dict[str, BaseTool] = {}
        self.tool_categories: Dict[str, List[str]] = {}
        if register_defaults:
            self._initialize_default_tools()

    def _initialize_default_tools(self):
        """Register the advisor's analysis, reporting and management tools"""

        for tool in (competitor_tool, market_tool, customer_tool):
            self.register_tool(tool, category="analysis")
        self.register_tool(vc_report_tool, category="reporting")
        self.register_tool(todo_tool, category="management")

    def register_tool(self, tool: BaseTool, category: str = "general"):
        """Register a new tool, replacing any tool with the same name"""

        if tool.name in self.tools:
            for names in self.tool_categories.values():
                if tool.name in names:
                    names.remove(tool.name)

        self.tools[tool.name] = tool
        self.tool_categories.setdefault(category, []).append(tool.name)

    def get_tool(self, name: str) -> Optional[BaseTool]:
        return self.tools.get(name)

    def get_all_tools(self) -> List[BaseTool]:
        return list(self.tools.values())

    def get_tools_by_category(self, category: str) -> List[BaseTool]:
        """Get tools by category"""

        tool_names = self.tool_categories.get(category, [])
        return [self.tools[name] for name in tool_names if name in self.tools]

    def search_tools(self, query: str) -> List[BaseTool]:
        """Search tools by name or description"""

        query_lower = query.lower()
        return [
            tool for tool in self.tools.values()
            if query_lower in tool.name.lower() or query_lower in (tool.description or "").lower()
        ]
