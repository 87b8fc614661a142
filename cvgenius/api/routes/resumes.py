"""
Resume CRUD endpoints. Every operation is scoped to the caller's resumes.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from cvgenius.core.auth_dependency import get_current_user
from cvgenius.schemas.resume import (
    ResumeCreate,
    ResumeCreateResponse,
    ResumeResponse,
    ResumeUpdate,
    ResumeUpdateResponse,
    SuccessResponse,
)
from cvgenius.storage.base import ResumeRecord, ResumeStore, new_resume_id
from cvgenius.storage.dependencies import get_resume_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["Resume"])


def _get_owned(resumes: ResumeStore, user_id: str, resume_id: str) -> ResumeRecord:
    resume = resumes.get(user_id, resume_id)
    if resume is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resume not found"
        )
    return resume


@router.get("", response_model=List[ResumeResponse])
def list_resumes(
    user_id: str = Depends(get_current_user),
    resumes: ResumeStore = Depends(get_resume_store),
):
    return [ResumeResponse.model_validate(r) for r in resumes.list_for_user(user_id)]


@router.post("", response_model=ResumeCreateResponse, status_code=status.HTTP_201_CREATED)
def create_resume(
    payload: ResumeCreate,
    user_id: str = Depends(get_current_user),
    resumes: ResumeStore = Depends(get_resume_store),
):
    record = ResumeRecord(
        resume_id=new_resume_id(),
        user_id=user_id,
        title=payload.title or "Untitled Resume",
        template=payload.template or "modern",
    )
    resumes.put(record)
    logger.info(f"Resume created: resume_id={record.resume_id}, user_id={user_id}")
    return ResumeCreateResponse(resume_id=record.resume_id)


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume(
    resume_id: str,
    user_id: str = Depends(get_current_user),
    resumes: ResumeStore = Depends(get_resume_store),
):
    return ResumeResponse.model_validate(_get_owned(resumes, user_id, resume_id))


@router.put("/{resume_id}", response_model=ResumeUpdateResponse)
def update_resume(
    resume_id: str,
    payload: ResumeUpdate,
    user_id: str = Depends(get_current_user),
    resumes: ResumeStore = Depends(get_resume_store),
):
    resume = _get_owned(resumes, user_id, resume_id)

    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None:
            if key in ("title", "template"):
                continue
            if key not in ("personal_info", "content"):
                value = []
        setattr(resume, key, value)

    stored = resumes.put(resume)
    logger.info(f"Resume updated: resume_id={resume_id}, user_id={user_id}")
    return ResumeUpdateResponse(resume=ResumeResponse.model_validate(stored))


@router.delete("/{resume_id}", response_model=SuccessResponse)
def delete_resume(
    resume_id: str,
    user_id: str = Depends(get_current_user),
    resumes: ResumeStore = Depends(get_resume_store),
):
    if not resumes.delete(user_id, resume_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resume not found"
        )
    logger.info(f"Resume deleted: resume_id={resume_id}, user_id={user_id}")
    return SuccessResponse()
