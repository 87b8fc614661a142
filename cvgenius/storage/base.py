"""
Storage interfaces.

Routes depend on these abstractions, never on module-level state, so the HTTP
layer can run against SQL in production and plain dictionaries in tests.

Invariant: stores never make domain decisions (no scoring, no quota checks).
"""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


RESUME_CONTENT_FIELDS = (
    "personal_info",
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "languages",
    "content",
)


def new_resume_id() -> str:
    return f"res_{uuid.uuid4().hex}"


@dataclass
class ResumeRecord:
    """Plain resume data, independent of the storage backend."""
    resume_id: str
    user_id: str
    title: str = "Untitled Resume"
    template: str = "modern"
    personal_info: Optional[Dict[str, Any]] = None
    experience: List[Any] = field(default_factory=list)
    education: List[Any] = field(default_factory=list)
    skills: List[Any] = field(default_factory=list)
    projects: List[Any] = field(default_factory=list)
    certifications: List[Any] = field(default_factory=list)
    languages: List[Any] = field(default_factory=list)
    content: Optional[Dict[str, Any]] = None
    ats_score: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ReportRecord:
    """A stored ATS report, keyed by an opaque id and timestamp."""
    id: Any
    user_id: str
    resume_id: Optional[str]
    score: int
    report: Dict[str, Any]
    created_at: Optional[datetime] = None


class ResumeStore(ABC):
    """Per-user resume storage."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[ResumeRecord]:
        """Resumes owned by the user, newest first."""

    @abstractmethod
    def get(self, user_id: str, resume_id: str) -> Optional[ResumeRecord]:
        """Return the resume if it exists and belongs to the user."""

    @abstractmethod
    def put(self, record: ResumeRecord) -> ResumeRecord:
        """Insert or replace a resume; returns the stored version."""

    @abstractmethod
    def delete(self, user_id: str, resume_id: str) -> bool:
        """Delete the resume; False if it did not exist for this user."""


class ReportStore(ABC):
    """Append-only history of ATS reports."""

    @abstractmethod
    def put(self, user_id: str, resume_id: Optional[str], score: int,
            report: Dict[str, Any]) -> ReportRecord:
        """Store a report verbatim."""

    @abstractmethod
    def list_for_user(self, user_id: str, resume_id: Optional[str] = None) -> List[ReportRecord]:
        """Reports for the user, newest first, optionally for one resume."""
