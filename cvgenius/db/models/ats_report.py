from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from cvgenius.db.base import Base

class ATSReportRecord(Base):
    """A stored ATS score report, kept verbatim as returned to the client."""
    __tablename__ = "ats_reports"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    resume_id = Column(String, nullable=True, index=True)
    score = Column(Integer, nullable=False)
    report = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
