from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from hr_autopilot.models.hr import AlertStatus, ComplianceAlert, ComplianceSnapshot, Severity
from hr_autopilot.services.compliance_check import LLM_MAX_TOKENS, LLM_TEMPERATURE, ComplianceCheckWorkflow
from hr_autopilot.services.errors import MalformedResponseError, ProviderError
from tests.conftest import make_llm_response

SNAPSHOT = ComplianceSnapshot(
    work_hours={"emp-1": 52, "emp-2": 38},
    contracts={"emp-1": "Full-time", "emp-2": "Part-time, missing notice period"},
    leave_records=["lr-1"],
)

SCAN_REPLY = json.dumps(
    {
        "issues": [
            {
                "type": "working_hours",
                "severity": "HIGH",
                "description": "emp-1 exceeds 40h/week",
                "suggested_actions": ["Rebalance workload"],
            },
            {"type": "contract", "severity": "MEDIUM", "description": "emp-2 contract lacks notice period"},
        ]
    }
)


@pytest.fixture
def workflow(llm):
    return ComplianceCheckWorkflow(llm)


class TestScan:
    @pytest.mark.anyio
    async def test_returns_open_alerts(self, workflow, llm):
        llm.client.chat.completions.create = AsyncMock(return_value=make_llm_response(SCAN_REPLY))

        alerts = await workflow.scan(SNAPSHOT)

        assert len(alerts) == 2
        assert alerts[0].severity is Severity.HIGH
        assert alerts[0].suggested_actions == ["Rebalance workload"]
        assert alerts[1].type == "contract"
        assert all(a.status is AlertStatus.OPEN for a in alerts)

    @pytest.mark.anyio
    async def test_uses_deterministic_settings(self, workflow, llm):
        llm.client.chat.completions.create = AsyncMock(return_value=make_llm_response('{"issues": []}'))

        alerts = await workflow.scan(SNAPSHOT)

        kwargs = llm.client.chat.completions.create.call_args[1]
        assert kwargs["temperature"] == LLM_TEMPERATURE == 0.0
        assert kwargs["max_tokens"] == LLM_MAX_TOKENS
        assert alerts == []

    @pytest.mark.anyio
    async def test_malformed_reply_propagates(self, workflow, llm):
        llm.client.chat.completions.create = AsyncMock(return_value=make_llm_response('{"issues": "none"}'))

        with pytest.raises(MalformedResponseError) as exc_info:
            await workflow.scan(SNAPSHOT)
        assert exc_info.value.raw_text == '{"issues": "none"}'

    @pytest.mark.anyio
    async def test_malformed_reply_is_audited(self, workflow, llm, audit_sink):
        llm.client.chat.completions.create = AsyncMock(return_value=make_llm_response("not json"))

        with pytest.raises(MalformedResponseError):
            await workflow.scan(SNAPSHOT)

        events = audit_sink.by_kind("LLM_ERROR")
        assert len(events) == 1
        assert events[0].entity_id == "compliance-scan"
        assert events[0].metadata["error_type"] == "MalformedResponseError"

    @pytest.mark.anyio
    async def test_provider_error_propagates(self, workflow, llm):
        llm.client.chat.completions.create = AsyncMock(side_effect=Exception("timeout"))

        with pytest.raises(ProviderError) as exc_info:
            await workflow.scan(SNAPSHOT)
        assert exc_info.value.operation == "compliance-scan"


class TestScanEndpoint:
    def test_requires_auth(self, client):
        response = client.post("/api/v1/compliance/scan", json={})
        assert response.status_code == 401

    def test_returns_alerts(self, authenticated_client):
        alert = ComplianceAlert(
            type="working_hours",
            severity=Severity.HIGH,
            description="emp-1 exceeds 40h/week",
            detected_at=datetime(2024, 1, 8, tzinfo=timezone.utc),
        )
        with patch("hr_autopilot.api.v1.endpoints.compliance.hr_dispatcher") as mock_dispatcher:
            mock_dispatcher.scan_compliance = AsyncMock(return_value=[alert])
            response = authenticated_client.post(
                "/api/v1/compliance/scan",
                json={"work_hours": {"emp-1": 52}, "contracts": {}, "leave_records": []},
            )

        assert response.status_code == 200
        data = response.json()
        assert data[0]["severity"] == "HIGH"
        assert data[0]["status"] == "OPEN"

    def test_returns_502_on_malformed_reply(self, authenticated_client):
        with patch("hr_autopilot.api.v1.endpoints.compliance.hr_dispatcher") as mock_dispatcher:
            mock_dispatcher.scan_compliance = AsyncMock(side_effect=MalformedResponseError("bad", "not json"))
            response = authenticated_client.post("/api/v1/compliance/scan", json={"work_hours": {"emp-1": 52}})

        assert response.status_code == 502
        assert "Compliance scan failed" in response.json()["detail"]

    def test_returns_502_when_llm_not_configured(self, authenticated_client):
        response = authenticated_client.post("/api/v1/compliance/scan", json={"work_hours": {"emp-1": 52}})
        assert response.status_code == 502
        assert "not initialized" in response.json()["detail"]
