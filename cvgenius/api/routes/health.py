"""
Health check endpoint for deployment monitoring.
"""
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from cvgenius.core.auth_dependency import get_db

router = APIRouter(prefix="/health", tags=["Health"])

API_VERSION = "1.0.0"


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for deployment monitoring.
    
    Returns 200 with status "degraded" when the database is unreachable.
    """
    status = "healthy"

    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {type(e).__name__}"
        status = "degraded"

    return {
        "status": status,
        "timestamp": datetime.utcnow().isoformat(),
        "database": db_status,
        "version": API_VERSION,
    }
