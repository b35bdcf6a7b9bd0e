"""
API v1 router setup
Organized into: public (booking page), dashboard (owner) and agent (x-api-key) routes
"""
from fastapi import APIRouter

from app.api.v1.public import booking
from app.api.v1.dashboard import schedule, appointments as dashboard_appointments
from app.api.v1.api_key import appointments as agent_appointments, catalog

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    booking.router,
    prefix="/public",
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES (x-api-key required)
# ============================================================================
api_v1_router.include_router(
    schedule.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    dashboard_appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

# ============================================================================
# AGENT ROUTES (x-api-key required)
# ============================================================================
# Integration surface for chat agents and automations

api_v1_router.include_router(
    agent_appointments.router,
    prefix="/agent",
    tags=["Agent"]
)

api_v1_router.include_router(
    catalog.router,
    prefix="/agent",
    tags=["Agent"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    Shows the structure of all API routes organized by authentication type.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "dashboard": "x-api-key header required",
            "agent": "x-api-key header required"
        }
    }
