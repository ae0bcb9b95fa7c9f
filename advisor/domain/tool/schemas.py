from pydantic import BaseModel, Field


class IdeaInput(BaseModel):
    """Input shared by the analysis tools"""
    idea_description: str = Field(description="The startup idea to analyze")
