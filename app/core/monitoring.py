"""Health checks and monitoring endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.redis import get_redis
from app.config.settings import settings

health_router = APIRouter()


@health_router.get("/")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "barbershop-booking-api"}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Detailed health check with dependencies"""
    checks = {
        "api": "healthy",
        "database": "unknown",
        "redis": "not_used",
        "overall": "unknown"
    }

    # Check database
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        checks["database"] = f"unhealthy: {str(e)}"

    # Redis only matters when it holds the booking locks
    if settings.BOOKING_LOCK_BACKEND == "redis":
        try:
            get_redis().ping()
            checks["redis"] = "healthy"
        except Exception as e:
            checks["redis"] = f"unhealthy: {str(e)}"

    # Overall status
    if all(status in ("healthy", "not_used") for key, status in checks.items() if key != "overall"):
        checks["overall"] = "healthy"
    else:
        checks["overall"] = "degraded"

    return checks
