"""
Pydantic schemas for resume endpoints. JSON keys are camelCase.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ResumeCreate(CamelModel):
    """Schema for creating an empty resume."""
    title: Optional[str] = Field(None, max_length=255)
    template: Optional[str] = Field(None, max_length=64)


class ResumeUpdate(CamelModel):
    """Schema for updating a resume. Omitted fields keep their stored value."""
    title: Optional[str] = Field(None, max_length=255)
    template: Optional[str] = Field(None, max_length=64)
    personal_info: Optional[Dict[str, Any]] = None
    experience: Optional[List[Any]] = None
    education: Optional[List[Any]] = None
    skills: Optional[List[Any]] = None
    projects: Optional[List[Any]] = None
    certifications: Optional[List[Any]] = None
    languages: Optional[List[Any]] = None
    content: Optional[Dict[str, Any]] = None


class ResumeResponse(CamelModel):
    resume_id: str
    user_id: str
    title: str
    template: str
    personal_info: Optional[Dict[str, Any]] = None
    experience: List[Any] = Field(default_factory=list)
    education: List[Any] = Field(default_factory=list)
    skills: List[Any] = Field(default_factory=list)
    projects: List[Any] = Field(default_factory=list)
    certifications: List[Any] = Field(default_factory=list)
    languages: List[Any] = Field(default_factory=list)
    content: Optional[Dict[str, Any]] = None
    ats_score: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResumeCreateResponse(CamelModel):
    success: bool = True
    resume_id: str


class ResumeUpdateResponse(CamelModel):
    success: bool = True
    resume: ResumeResponse


class SuccessResponse(BaseModel):
    success: bool = True
