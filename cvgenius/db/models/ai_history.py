from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func
from cvgenius.db.base import Base

class AIHistoryRecord(Base):
    __tablename__ = "ai_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    section = Column(String, nullable=True)
    original_content = Column(Text, nullable=False)
    improved_content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
