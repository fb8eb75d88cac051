from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.core.database import check_connection

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    database_ok = check_connection()
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "database": "reachable" if database_ok else "unreachable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
