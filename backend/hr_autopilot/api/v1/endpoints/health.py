from __future__ import annotations

from fastapi import APIRouter, Depends

from hr_autopilot.core.config import settings
from hr_autopilot.core.dependencies import get_current_user
from hr_autopilot.models.auth import UserInfo
from hr_autopilot.services.dispatcher import hr_dispatcher

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {
        "azure_openai": "ok" if hr_dispatcher.llm.initialized else "not_configured",
        "audit_sink": type(hr_dispatcher.audit_sink).__name__,
    }

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "demo_mode": hr_dispatcher.demo_mode,
        "services": services,
    }


@router.get("/protected")
async def health_protected(user: UserInfo = Depends(get_current_user)):
    return {"status": "ok", "user": user.model_dump()}


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
