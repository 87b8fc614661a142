from sqlalchemy import Column, Integer, String
from cvgenius.db.base import Base

class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, unique=True, nullable=False, index=True)

    plan_type = Column(String, default="free")  # free | pro | premium
    status = Column(String, default="active")
