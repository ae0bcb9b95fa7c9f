"""Competitor analysis tool (mock data)."""

from typing import List, Literal

from pydantic import BaseModel

from advisor.domain.tool.schemas import IdeaInput
from advisor.domain.tool.tool_executor import create_tool


class Competitor(BaseModel):
    name: str
    url: str
    description: str
    pricing: str
    strengths: List[str]
    weaknesses: List[str]
    funding: str
    market_position: str


class CompetitorAnalysis(BaseModel):
    competitors: List[Competitor]
    market_maturity: Literal["Early", "Growing", "Mature", "Saturated"]
    market_gaps: List[str]
    differentiation_strategy: str


def analyze_competitors(idea_description: str) -> CompetitorAnalysis:
    return CompetitorAnalysis(
        competitors=[
            Competitor(
                name="MarketLeader Inc",
                url="https://marketleader.com",
                description="Established player with comprehensive features and enterprise focus",
                pricing="$99-299/month",
                strengths=["Strong brand recognition", "Extensive feature set", "Large customer base"],
                weaknesses=["Complex interface", "Expensive for startups", "Slow innovation cycle"],
                funding="$200M Series D",
                market_position="Market Leader",
            ),
            Competitor(
                name="FastGrowth Co",
                url="https://fastgrowth.io",
                description="Modern alternative with focus on UX and developer experience",
                pricing="$49-149/month",
                strengths=["Intuitive UI/UX", "Developer-friendly API", "Fast product updates"],
                weaknesses=["Limited enterprise features", "Smaller team", "Fewer integrations"],
                funding="$40M Series B",
                market_position="Fast Follower",
            ),
            Competitor(
                name="BudgetOption",
                url="https://budgetoption.app",
                description="Affordable solution targeting SMBs and freelancers",
                pricing="$19-59/month",
                strengths=["Very affordable", "Simple to use", "No contracts"],
                weaknesses=["Limited features", "Basic support", "Lacks scalability"],
                funding="$5M Seed",
                market_position="Budget Alternative",
            ),
        ],
        market_maturity="Growing",
        market_gaps=[
            "Lack of AI-powered automation features",
            "Poor mobile experience across all competitors",
            "Complex pricing that confuses small businesses",
        ],
        differentiation_strategy=(
            "Focus on an AI-first approach, simple pricing and a strong mobile "
            "experience to capture the underserved SMB segment"
        ),
    )


def format_competitor_result(result: CompetitorAnalysis) -> str:
    competitors = "\n\n".join(
        f"{i}. {c.name} ({c.market_position})\n"
        f"   - {c.description}\n"
        f"   - Pricing: {c.pricing}\n"
        f"   - Key weakness: {c.weaknesses[0]}"
        for i, c in enumerate(result.competitors, start=1)
    )
    gaps = "\n".join(f"• {gap}" for gap in result.market_gaps)

    return (
        "Competitor Analysis Complete\n\n"
        f"Found {len(result.competitors)} main competitors:\n\n"
        f"{competitors}\n\n"
        f"Market Maturity: {result.market_maturity}\n\n"
        f"Key Market Gaps:\n{gaps}\n\n"
        f"Differentiation Strategy:\n{result.differentiation_strategy}"
    )


competitor_tool = create_tool(
    name="competitor_analysis",
    description=(
        "Analyzes competitors for a startup idea. Use this when the user asks about "
        "competitors, the competitive landscape or market positioning. Returns "
        "competitors with their strengths, weaknesses and market gaps."
    ),
    args_schema=IdeaInput,
    execute=analyze_competitors,
    format_result=format_competitor_result
)
