"""FastAPI dependencies that hand out storage bound to the request's DB session."""
from fastapi import Depends
from sqlalchemy.orm import Session

from cvgenius.core.auth_dependency import get_db
from cvgenius.storage.base import ReportStore, ResumeStore
from cvgenius.storage.sql_store import SqlReportStore, SqlResumeStore


def get_resume_store(db: Session = Depends(get_db)) -> ResumeStore:
    return SqlResumeStore(db)


def get_report_store(db: Session = Depends(get_db)) -> ReportStore:
    return SqlReportStore(db)
