from fastapi import APIRouter

from hr_autopilot.api.v1.endpoints import compliance, health, leave, onboarding

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(leave.router)
api_router.include_router(compliance.router)
api_router.include_router(onboarding.router)
