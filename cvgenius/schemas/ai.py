"""
Pydantic schemas for AI endpoints.
"""
from typing import List
from pydantic import BaseModel, Field


class SuggestionRequest(BaseModel):
    """Request model for section rewriting."""
    content: str = Field(..., min_length=1, max_length=10000, description="Section text to improve")
    section: str = Field("summary", min_length=1, max_length=64, description="Resume section name")

    class Config:
        json_schema_extra = {
            "example": {
                "content": "Worked on backend services and fixed bugs.",
                "section": "experience"
            }
        }


class SuggestionResponse(BaseModel):
    success: bool = True
    improved: str = Field(..., description="Rewritten section")
    suggestions: List[str] = Field(default_factory=list, description="Coaching suggestions")
