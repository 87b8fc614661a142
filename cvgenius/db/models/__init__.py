"""
Database models module.

Imports every model so they are registered with Base.metadata before table creation.
"""
from cvgenius.db.models.subscription import Subscription
from cvgenius.db.models.usage import UsageEvent
from cvgenius.db.models.resume import Resume
from cvgenius.db.models.ats_report import ATSReportRecord
from cvgenius.db.models.ai_history import AIHistoryRecord

__all__ = [
    "Subscription",
    "UsageEvent",
    "Resume",
    "ATSReportRecord",
    "AIHistoryRecord",
]
