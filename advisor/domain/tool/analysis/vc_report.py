"""VC evaluation report tool (mock data)."""

from typing import List, Literal

from pydantic import BaseModel

from advisor.domain.tool.schemas import IdeaInput
from advisor.domain.tool.tool_executor import create_tool

Recommendation = Literal["Strong Pass", "Pass", "Maybe", "No"]


class VCScore(BaseModel):
    dimension: str
    score: int  # 1-10
    rationale: str


class SwotAnalysis(BaseModel):
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]


class VCReport(BaseModel):
    overall_score: int  # 1-100
    recommendation: Recommendation
    scores: List[VCScore]
    swot_analysis: SwotAnalysis
    key_risks: List[str]
    investment_thesis: str
    next_steps: List[str]


DIMENSION_SCORES = [
    VCScore(dimension="Market Opportunity", score=8,
            rationale="Large TAM ($50B) with strong growth (18% CAGR)."),
    VCScore(dimension="Team & Execution", score=7,
            rationale="Assumes an experienced founding team; capabilities still to be validated."),
    VCScore(dimension="Product Differentiation", score=8,
            rationale="Clear AI-first, simple-pricing strategy addressing identified gaps."),
    VCScore(dimension="Competitive Moat", score=6,
            rationale="Limited initial moat; integration depth can build defensibility."),
    VCScore(dimension="Go-to-Market", score=7,
            rationale="Well-defined ICP; self-serve model enables efficient scaling."),
    VCScore(dimension="Business Model", score=8,
            rationale="SaaS model with predictable revenue and high willingness to pay."),
    VCScore(dimension="Timing & Trends", score=9,
            rationale="Strong timing with the AI adoption wave and remote work trends."),
]


def overall_score(scores: List[VCScore]) -> int:
    """Mean dimension score scaled to 100"""
    return round(sum(s.score for s in scores) / len(scores) * 10)


def recommend(score: int) -> Recommendation:
    if score >= 80:
        return "Strong Pass"
    if score >= 70:
        return "Pass"
    if score >= 60:
        return "Maybe"
    return "No"


def generate_vc_report(idea_description: str) -> VCReport:
    score = overall_score(DIMENSION_SCORES)

    return VCReport(
        overall_score=score,
        recommendation=recommend(score),
        scores=DIMENSION_SCORES,
        swot_analysis=SwotAnalysis(
            strengths=["Large and growing addressable market", "Clear differentiation"],
            weaknesses=["Late entrant against strong incumbents", "Limited initial moat"],
            opportunities=["Underserved SMB segment", "Partnerships with complementary tools"],
            threats=["Incumbents may copy key features", "Shrinking software budgets"],
        ),
        key_risks=[
            "Execution risk: can the team build and scale the product?",
            "Competition risk: incumbents have deep pockets and distribution",
            "Market risk: will customers switch from existing solutions?",
        ],
        investment_thesis=(
            "A large, growing market with clear customer pain points and an underserved "
            "segment. Success depends on fast iteration, efficient acquisition and building "
            "defensibility through integration depth."
        ),
        next_steps=[
            "Validate technical feasibility with a working prototype",
            "Interview 20+ target customers",
            "Build the MVP and get 10 paying customers",
        ],
    )


def format_vc_report(result: VCReport) -> str:
    scores = "\n".join(f"  {s.dimension}: {s.score}/10 - {s.rationale}" for s in result.scores)
    swot = result.swot_analysis

    def bullet(items: List[str], mark: str) -> str:
        return "\n".join(f"  {mark} {item}" for item in items)

    def numbered(items: List[str]) -> str:
        return "\n".join(f"  {i}. {item}" for i, item in enumerate(items, start=1))

    return (
        "VC EVALUATION REPORT\n"
        f"{'=' * 60}\n\n"
        f"OVERALL SCORE: {result.overall_score}/100\n"
        f"RECOMMENDATION: {result.recommendation}\n\n"
        f"DETAILED SCORES:\n{scores}\n\n"
        "SWOT ANALYSIS:\n\n"
        f"Strengths:\n{bullet(swot.strengths, '✓')}\n\n"
        f"Weaknesses:\n{bullet(swot.weaknesses, '✗')}\n\n"
        f"Opportunities:\n{bullet(swot.opportunities, '→')}\n\n"
        f"Threats:\n{bullet(swot.threats, '⚠')}\n\n"
        f"KEY RISKS:\n{numbered(result.key_risks)}\n\n"
        f"INVESTMENT THESIS:\n{result.investment_thesis}\n\n"
        f"RECOMMENDED NEXT STEPS:\n{numbered(result.next_steps)}"
    )


vc_report_tool = create_tool(
    name="vc_evaluation_report",
    description=(
        "Generates a comprehensive VC-style investment evaluation report for a startup "
        "idea: scores across 7 dimensions, SWOT analysis, key risks and investment "
        "thesis. Use this when the user asks for a complete evaluation, full report or "
        "investor perspective."
    ),
    args_schema=IdeaInput,
    execute=generate_vc_report,
    format_result=format_vc_report
)
