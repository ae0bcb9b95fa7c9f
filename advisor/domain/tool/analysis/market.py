"""Market sizing tool (mock data)."""

from typing import List, Literal

from pydantic import BaseModel

from advisor.domain.tool.schemas import IdeaInput
from advisor.domain.tool.tool_executor import create_tool


class MarketSize(BaseModel):
    tam: str  # Total Addressable Market
    sam: str  # Serviceable Addressable Market
    som: str  # Serviceable Obtainable Market


class MarketTrend(BaseModel):
    name: str
    impact: Literal["High", "Medium", "Low"]
    description: str


class MarketAnalysis(BaseModel):
    market_size: MarketSize
    growth_rate: str
    trends: List[MarketTrend]
    target_segment: str
    time_to_market: str


def estimate_market_size(idea_description: str) -> MarketAnalysis:
    return MarketAnalysis(
        market_size=MarketSize(tam="$50B", sam="$8B", som="$500M"),
        growth_rate="18% CAGR (2024-2029)",
        trends=[
            MarketTrend(
                name="AI Integration",
                impact="High",
                description="Rapid adoption of AI-powered features across software categories",
            ),
            MarketTrend(
                name="Remote Work",
                impact="High",
                description="Distributed teams keep driving demand for collaboration tools",
            ),
            MarketTrend(
                name="Privacy Regulations",
                impact="Medium",
                description="Compliance requirements (GDPR, CCPA) shape product design",
            ),
        ],
        target_segment="SMBs (10-200 employees) in technology and professional services",
        time_to_market="6-9 months for MVP, 12-18 months for product-market fit",
    )


def format_market_result(result: MarketAnalysis) -> str:
    trends = "\n".join(
        f"• {t.name} ({t.impact} impact): {t.description}" for t in result.trends
    )

    return (
        "Market Size Estimation\n\n"
        "Market Opportunity:\n"
        f"• TAM (Total Addressable Market): {result.market_size.tam}\n"
        f"• SAM (Serviceable Addressable Market): {result.market_size.sam}\n"
        f"• SOM (Serviceable Obtainable Market): {result.market_size.som}\n\n"
        f"Growth Rate: {result.growth_rate}\n\n"
        f"Key Market Trends:\n{trends}\n\n"
        f"Target Segment: {result.target_segment}\n\n"
        f"Time to Market: {result.time_to_market}"
    )


market_tool = create_tool(
    name="market_sizing",
    description=(
        "Estimates market size and analyzes market trends for a startup idea. Use this "
        "when the user asks about market size, TAM/SAM/SOM, market opportunity or growth "
        "potential."
    ),
    args_schema=IdeaInput,
    execute=estimate_market_size,
    format_result=format_market_result
)
