"""
Dictionary-backed stores for tests and local experiments.

Each instance owns its data; nothing is shared at module level.
"""
import copy
import itertools
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from cvgenius.storage.base import ReportRecord, ReportStore, ResumeRecord, ResumeStore


class InMemoryResumeStore(ResumeStore):

    def __init__(self):
        self._resumes: Dict[Tuple[str, str], ResumeRecord] = {}

    def list_for_user(self, user_id: str) -> List[ResumeRecord]:
        records = [copy.deepcopy(r) for (owner, _), r in self._resumes.items() if owner == user_id]
        # Newest first; insertion order breaks ties
        return list(reversed(sorted(records, key=lambda r: r.created_at)))

    def get(self, user_id: str, resume_id: str) -> Optional[ResumeRecord]:
        record = self._resumes.get((user_id, resume_id))
        return copy.deepcopy(record) if record else None

    def put(self, record: ResumeRecord) -> ResumeRecord:
        key = (record.user_id, record.resume_id)
        stored = copy.deepcopy(record)
        now = datetime.utcnow()
        existing = self._resumes.get(key)
        stored.created_at = existing.created_at if existing else now
        stored.updated_at = now
        self._resumes[key] = stored
        return copy.deepcopy(stored)

    def delete(self, user_id: str, resume_id: str) -> bool:
        return self._resumes.pop((user_id, resume_id), None) is not None


class InMemoryReportStore(ReportStore):

    def __init__(self):
        self._reports: List[ReportRecord] = []
        self._ids = itertools.count(1)

    def put(self, user_id: str, resume_id: Optional[str], score: int,
            report: Dict[str, Any]) -> ReportRecord:
        record = ReportRecord(
            id=next(self._ids),
            user_id=user_id,
            resume_id=resume_id,
            score=score,
            report=copy.deepcopy(report),
            created_at=datetime.utcnow(),
        )
        self._reports.append(record)
        return copy.deepcopy(record)

    def list_for_user(self, user_id: str, resume_id: Optional[str] = None) -> List[ReportRecord]:
        return [
            copy.deepcopy(r) for r in reversed(self._reports)
            if r.user_id == user_id and (resume_id is None or r.resume_id == resume_id)
        ]
