from __future__ import annotations

import time
from datetime import date
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from starlette.testclient import TestClient

from hr_autopilot.core.dependencies import get_current_user
from hr_autopilot.main import app
from hr_autopilot.models.auth import UserInfo
from hr_autopilot.models.hr import Employee, LeaveRequest
from hr_autopilot.services.audit import InMemoryAuditSink
from hr_autopilot.services.cost_tracker import InMemoryCostTracker
from hr_autopilot.services.llm_client import LLMClient

TEST_JWT_SECRET = "test-secret-with-enough-entropy-0000000000"
TEST_AUDIENCE = "authenticated"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _auth_settings():
    from hr_autopilot.core.config import settings

    original_secret = settings.SUPABASE_JWT_SECRET
    original_audience = settings.SUPABASE_JWT_AUDIENCE
    settings.SUPABASE_JWT_SECRET = TEST_JWT_SECRET
    settings.SUPABASE_JWT_AUDIENCE = TEST_AUDIENCE
    yield
    settings.SUPABASE_JWT_SECRET = original_secret
    settings.SUPABASE_JWT_AUDIENCE = original_audience


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_token(
    *,
    sub: str = "user-123",
    email: str = "test@acme.io",
    name: str = "Test User",
    roles: list[str] | None = None,
    clearance_level: int = 0,
    audience: str = TEST_AUDIENCE,
    secret: str = TEST_JWT_SECRET,
    expired: bool = False,
) -> str:
    now = int(time.time())
    claims = {
        "sub": sub,
        "email": email,
        "aud": audience,
        "role": "authenticated",
        "user_metadata": {"full_name": name},
        "app_metadata": {"roles": roles or [], "clearance_level": clearance_level},
        "exp": now - 3600 if expired else now + 3600,
        "iat": now - 60,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def mock_user_viewer():
    return UserInfo(id="viewer-1", name="Viewer User", email="viewer@acme.io", roles=["viewer"])


@pytest.fixture
def mock_user_manager():
    return UserInfo(
        id="manager-1",
        name="Morgan Manager",
        email="manager@acme.io",
        roles=["hr_manager"],
        clearance_level=3,
    )


@pytest.fixture
def mock_user_junior_manager():
    return UserInfo(
        id="manager-2",
        name="Jamie Junior",
        email="junior@acme.io",
        roles=["hr_manager"],
        clearance_level=2,
    )


@pytest.fixture
def authenticated_client(mock_user_manager):
    app.dependency_overrides[get_current_user] = lambda: mock_user_manager
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def employee():
    return Employee(
        id="emp-1",
        name="Alex Kim",
        role="Backend Engineer",
        department="Engineering",
        leave_balance=12,
        experience_level="Senior",
    )


@pytest.fixture
def leave_request():
    return LeaveRequest(
        id="req-1",
        employee_id="emp-1",
        start_date=date(2024, 1, 2),
        end_date=date(2024, 1, 3),
        reason="flu",
    )


@pytest.fixture
def audit_sink():
    return InMemoryAuditSink()


@pytest.fixture
def cost_tracker():
    return InMemoryCostTracker()


@pytest.fixture
def llm(audit_sink, cost_tracker):
    client = LLMClient(audit_sink=audit_sink, cost_tracker=cost_tracker)
    client.initialized = True
    client.client = MagicMock()
    client.default_model = "gpt-3.5-turbo"
    return client


def make_llm_response(content: str | None, total_tokens: int = 120) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    response.usage.total_tokens = total_tokens
    return response
