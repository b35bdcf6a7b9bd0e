# ============================================================================
# FILE: app/api/dependencies.py
# Authentication dependencies for the integration and dashboard APIs
# ============================================================================
import hmac
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.settings import settings
from app.core.exceptions import BarberNotFoundError
from app.models.barber import Barber
from app.services.booking.booking_service import BookingService

# ============================================================================
# Security Schemes
# ============================================================================

api_key_header = APIKeyHeader(
    name="x-api-key",
    scheme_name="Agent API Key",
    description="Shared secret configured as AGENT_API_KEY",
    auto_error=False
)


async def require_api_key(
        request: Request,
        api_key: Optional[str] = Depends(api_key_header)
) -> str:
    """
    Reject requests without the configured x-api-key.
    An empty AGENT_API_KEY disables the integration API entirely.
    """
    expected = settings.AGENT_API_KEY
    if not expected or not api_key or not hmac.compare_digest(api_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )

    request.state.api_key = api_key
    return api_key


async def get_barber(
        barber_id: str,
        db: Session = Depends(get_db)
) -> Barber:
    """Resolve the {barber_id} path parameter to an active barber"""
    try:
        return BookingService.get_active_barber(db, barber_id)
    except BarberNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Barber not found"
        )
