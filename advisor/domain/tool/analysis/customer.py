"""Customer analysis tool (mock data)."""

from typing import List, Literal

from pydantic import BaseModel

from advisor.domain.tool.schemas import IdeaInput
from advisor.domain.tool.tool_executor import create_tool


class CustomerSegment(BaseModel):
    name: str
    size: str
    characteristics: List[str]
    pain_points: List[str]
    willingness_to_pay: Literal["High", "Medium", "Low"]


class IdealCustomerProfile(BaseModel):
    title: str
    company_size: str
    industry: List[str]
    budget: str
    key_needs: List[str]


class CustomerAnalysis(BaseModel):
    segments: List[CustomerSegment]
    icp: IdealCustomerProfile
    buying_process: str
    acquisition_channels: List[str]
    retention_factors: List[str]


def analyze_customers(idea_description: str) -> CustomerAnalysis:
    return CustomerAnalysis(
        segments=[
            CustomerSegment(
                name="Tech Startups",
                size="~50K companies in target markets",
                characteristics=["Fast-paced environment", "Tech-savvy users", "Early adopters"],
                pain_points=["Need to move fast with limited resources", "Existing tools too complex"],
                willingness_to_pay="High",
            ),
            CustomerSegment(
                name="Digital Agencies",
                size="~100K agencies globally",
                characteristics=["Manage multiple clients", "Value white-label options"],
                pain_points=["Manual processes waste billable time", "Tool fragmentation"],
                willingness_to_pay="Medium",
            ),
            CustomerSegment(
                name="SMB Enterprises",
                size="~500K companies (10-200 employees)",
                characteristics=["Limited IT resources", "Price-sensitive"],
                pain_points=["Enterprise tools too expensive", "Lack of technical expertise"],
                willingness_to_pay="Low",
            ),
        ],
        icp=IdealCustomerProfile(
            title="Head of Product / CTO at tech startup",
            company_size="15-50 employees",
            industry=["SaaS", "E-commerce", "FinTech", "HealthTech"],
            budget="$10K-50K annual software budget",
            key_needs=["Fast implementation", "Clear ROI within 3 months", "Simple pricing"],
        ),
        buying_process=(
            "Self-serve trial → Team evaluation (1-2 weeks) → Decision by founder/CTO "
            "→ Purchase by credit card"
        ),
        acquisition_channels=[
            "Product Hunt launch",
            "Developer communities (Reddit, HackerNews, Dev.to)",
            "Content marketing",
            "Partner integrations",
        ],
        retention_factors=[
            "Daily active usage and habit formation",
            "Integration depth",
            "Team-wide adoption",
        ],
    )


def format_customer_result(result: CustomerAnalysis) -> str:
    segments = "\n\n".join(
        f"{i}. {s.name} ({s.willingness_to_pay} willingness to pay)\n"
        f"   Size: {s.size}\n"
        f"   Top pain point: {s.pain_points[0]}"
        for i, s in enumerate(result.segments, start=1)
    )
    channels = "\n".join(f"• {c}" for c in result.acquisition_channels)
    retention = "\n".join(f"• {f}" for f in result.retention_factors)

    return (
        "Customer Analysis Complete\n\n"
        f"Customer Segments:\n{segments}\n\n"
        "Ideal Customer Profile (ICP):\n"
        f"• Title: {result.icp.title}\n"
        f"• Company Size: {result.icp.company_size}\n"
        f"• Industries: {', '.join(result.icp.industry)}\n"
        f"• Budget: {result.icp.budget}\n\n"
        f"Buying Process:\n{result.buying_process}\n\n"
        f"Recommended Acquisition Channels:\n{channels}\n\n"
        f"Key Retention Factors:\n{retention}"
    )


customer_tool = create_tool(
    name="customer_analysis",
    description=(
        "Analyzes customer segments and the ideal customer profile for a startup idea. "
        "Use this when the user asks about target customers, personas, ICP or "
        "go-to-market strategy."
    ),
    args_schema=IdeaInput,
    execute=analyze_customers,
    format_result=format_customer_result
)
