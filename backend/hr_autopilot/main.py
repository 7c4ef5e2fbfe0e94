from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hr_autopilot.api.v1.router import api_router
from hr_autopilot.core.config import settings
from hr_autopilot.services.dispatcher import hr_dispatcher

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await hr_dispatcher.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize WorkflowDispatcher; continuing without LLM")
    yield
    await hr_dispatcher.close()


app = FastAPI(
    title="HR Autopilot API",
    description="Leave approvals, compliance scans and onboarding plans",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "HR Autopilot API"}
