"""
Pydantic schemas for ATS endpoints.
"""
from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from cvgenius.services.ats_engine import ScoreReport


class ATSTestRequest(BaseModel):
    """Request schema for POST /api/ats/test. Blank texts are rejected by the route with 400."""
    resume_content: Optional[str] = Field(None, alias="resumeContent", description="Resume as plain text")
    job_description: Optional[str] = Field(None, alias="jobDescription", description="Job description text")
    resume_id: Optional[str] = Field(None, alias="resumeId", description="Resume to attach the score to")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "resumeContent": "Summary: backend engineer with 6 years experience...",
                "jobDescription": "Looking for a Python engineer with cloud experience",
                "resumeId": "res_4f1c2a..."
            }
        }


class ATSTestResponse(BaseModel):
    success: bool = True
    report: ScoreReport


class ATSHistoryEntry(BaseModel):
    """A stored report."""
    id: Any = Field(..., description="Opaque report identifier")
    resume_id: Optional[str] = Field(None, alias="resumeId")
    score: int
    report: Dict[str, Any] = Field(..., description="Report exactly as it was returned")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    class Config:
        populate_by_name = True
        from_attributes = True
