"""
ATS scoring endpoints.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from cvgenius.core.auth_dependency import get_current_user, get_db
from cvgenius.core.quota_guard import enforce_quota
from cvgenius.core.rate_limit import enforce_rate_limit
from cvgenius.schemas.ats import ATSHistoryEntry, ATSTestRequest, ATSTestResponse
from cvgenius.services.ats_engine import InvalidInputError, calculate_ats_score
from cvgenius.storage.base import ReportStore, ResumeStore
from cvgenius.storage.dependencies import get_report_store, get_resume_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ats", tags=["ATS"])


@router.post("/test", response_model=ATSTestResponse)
def ats_test(
    payload: ATSTestRequest,
    request: Request,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
    resumes: ResumeStore = Depends(get_resume_store),
    reports: ReportStore = Depends(get_report_store),
):
    """
    Score resume text against a job description.

    Rate limited per user and consumes one ``ats_scan`` credit; requests
    rejected as blank count against neither. When ``resumeId`` names one of the
    caller's resumes its stored ATS score is updated too. Every report is
    appended to the caller's history.
    """
    if not (payload.resume_content or "").strip() or not (payload.job_description or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Resume and job description required"
        )

    enforce_rate_limit(request, user_id)
    enforce_quota(db, user_id, "ats_scan")

    try:
        report = calculate_ats_score(payload.resume_content, payload.job_description)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    resume_id = payload.resume_id
    if resume_id:
        resume = resumes.get(user_id, resume_id)
        if resume is None:
            logger.warning(f"ATS score not attached: resume_id={resume_id} not found for user_id={user_id}")
            resume_id = None
        else:
            resume.ats_score = report.ats_score
            resumes.put(resume)

    reports.put(user_id, resume_id, report.ats_score, report.model_dump(by_alias=True))

    logger.info(f"ATS scan: user_id={user_id}, resume_id={resume_id}, score={report.ats_score}")

    return ATSTestResponse(report=report)


@router.get("/history", response_model=List[ATSHistoryEntry])
def ats_history(
    resume_id: Optional[str] = Query(None, alias="resumeId"),
    user_id: str = Depends(get_current_user),
    reports: ReportStore = Depends(get_report_store),
):
    """Stored ATS reports for the caller, newest first."""
    return [
        ATSHistoryEntry.model_validate(record)
        for record in reports.list_for_user(user_id, resume_id)
    ]
