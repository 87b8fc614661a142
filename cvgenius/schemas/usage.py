"""
Pydantic schemas for usage endpoints.
"""
from typing import Optional, List
from pydantic import BaseModel, Field


class FeatureUsageDetail(BaseModel):
    """Usage details for a single feature."""
    feature: str = Field(..., description="Feature name (ats_scan, ai_suggestions)")
    limit: Optional[int] = Field(None, description="Monthly limit (None for unlimited)")
    used: int = Field(..., description="Current month usage")
    remaining: Optional[int] = Field(None, description="Remaining quota (None for unlimited)")
    unlimited: bool = Field(..., description="Whether this feature has unlimited quota")


class UsageResponse(BaseModel):
    """Response schema for GET /api/me/usage."""
    plan: str = Field(..., description="Current plan type (free, pro, premium)")
    month_key: str = Field(..., description="Current month in YYYY-MM format")
    features: List[FeatureUsageDetail] = Field(..., description="Per-feature usage details")

    class Config:
        json_schema_extra = {
            "example": {
                "plan": "pro",
                "month_key": "2026-10",
                "features": [
                    {"feature": "ats_scan", "limit": 50, "used": 5, "remaining": 45, "unlimited": False},
                    {"feature": "ai_suggestions", "limit": 50, "used": 0, "remaining": 50, "unlimited": False}
                ]
            }
        }
