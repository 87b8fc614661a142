"""
SQLAlchemy-backed stores.
"""
import copy
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from cvgenius.db.models.resume import Resume
from cvgenius.db.models.ats_report import ATSReportRecord
from cvgenius.storage.base import (
    RESUME_CONTENT_FIELDS,
    ReportRecord,
    ReportStore,
    ResumeRecord,
    ResumeStore,
)

logger = logging.getLogger(__name__)


def _to_record(row: Resume) -> ResumeRecord:
    return ResumeRecord(
        resume_id=row.resume_id,
        user_id=row.user_id,
        title=row.title,
        template=row.template,
        personal_info=copy.deepcopy(row.personal_info),
        experience=copy.deepcopy(row.experience or []),
        education=copy.deepcopy(row.education or []),
        skills=copy.deepcopy(row.skills or []),
        projects=copy.deepcopy(row.projects or []),
        certifications=copy.deepcopy(row.certifications or []),
        languages=copy.deepcopy(row.languages or []),
        content=copy.deepcopy(row.content),
        ats_score=row.ats_score or 0,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_report(row: ATSReportRecord) -> ReportRecord:
    return ReportRecord(
        id=row.id,
        user_id=row.user_id,
        resume_id=row.resume_id,
        score=row.score,
        report=copy.deepcopy(row.report),
        created_at=row.created_at,
    )


class SqlResumeStore(ResumeStore):

    def __init__(self, db: Session):
        self.db = db

    def _query(self, user_id: str, resume_id: str):
        return self.db.query(Resume).filter(
            Resume.resume_id == resume_id,
            Resume.user_id == user_id,
        )

    def list_for_user(self, user_id: str) -> List[ResumeRecord]:
        rows = (
            self.db.query(Resume)
            .filter(Resume.user_id == user_id)
            .order_by(Resume.created_at.desc(), Resume.id.desc())
            .all()
        )
        return [_to_record(row) for row in rows]

    def get(self, user_id: str, resume_id: str) -> Optional[ResumeRecord]:
        row = self._query(user_id, resume_id).first()
        return _to_record(row) if row else None

    def put(self, record: ResumeRecord) -> ResumeRecord:
        row = self._query(record.user_id, record.resume_id).first()
        values = asdict(record)
        values.pop("created_at")
        values.pop("updated_at")

        if row is None:
            row = Resume(**values)
            self.db.add(row)
        else:
            for key in ("title", "template", "ats_score") + RESUME_CONTENT_FIELDS:
                setattr(row, key, values[key])

        self.db.commit()
        self.db.refresh(row)
        logger.debug(f"Stored resume resume_id={record.resume_id} user_id={record.user_id}")
        return _to_record(row)

    def delete(self, user_id: str, resume_id: str) -> bool:
        row = self._query(user_id, resume_id).first()
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True


class SqlReportStore(ReportStore):

    def __init__(self, db: Session):
        self.db = db

    def put(self, user_id: str, resume_id: Optional[str], score: int,
            report: Dict[str, Any]) -> ReportRecord:
        row = ATSReportRecord(
            user_id=user_id,
            resume_id=resume_id,
            score=score,
            report=report,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _to_report(row)

    def list_for_user(self, user_id: str, resume_id: Optional[str] = None) -> List[ReportRecord]:
        query = self.db.query(ATSReportRecord).filter(ATSReportRecord.user_id == user_id)
        if resume_id is not None:
            query = query.filter(ATSReportRecord.resume_id == resume_id)
        rows = query.order_by(ATSReportRecord.created_at.desc(), ATSReportRecord.id.desc()).all()
        return [_to_report(row) for row in rows]
