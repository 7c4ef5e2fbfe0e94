"""Authentication models for Supabase-issued JWTs."""

from __future__ import annotations

from pydantic import BaseModel

from hr_autopilot.models.hr import HRManager


class AppMetadata(BaseModel):
    roles: list[str] = []
    clearance_level: int = 0


class TokenPayload(BaseModel):
    sub: str | None = None
    email: str | None = None
    user_metadata: dict = {}
    app_metadata: AppMetadata = AppMetadata()


class UserInfo(BaseModel):
    id: str | None = None
    name: str | None = None
    email: str | None = None
    roles: list[str] = []
    clearance_level: int = 0

    def as_manager(self) -> HRManager:
        return HRManager(
            id=self.id or "unknown",
            name=self.name or self.email,
            clearance_level=self.clearance_level,
        )
