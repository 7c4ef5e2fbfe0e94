from __future__ import annotations

import logging
from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from hr_autopilot.models.hr import DecisionStatus, HRDecision, LeaveRequest
from hr_autopilot.services.errors import InvalidLeaveRequestError
from hr_autopilot.services.leave_rules import (
    count_business_days,
    error_decision,
    log_decision,
    validate_leave_request,
)


class TestCountBusinessDays:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (date(2024, 1, 2), date(2024, 1, 3), 2),  # Tue-Wed
            (date(2024, 1, 1), date(2024, 1, 5), 5),  # full week
            (date(2024, 1, 6), date(2024, 1, 7), 0),  # weekend only
            (date(2024, 1, 5), date(2024, 1, 8), 2),  # Fri-Mon
            (date(2024, 1, 3), date(2024, 1, 3), 1),
            (date(2024, 1, 1), date(2024, 1, 14), 10),
        ],
    )
    def test_counts_weekdays_inclusive(self, start, end, expected):
        assert count_business_days(start, end) == expected

    def test_reversed_range_is_zero(self):
        assert count_business_days(date(2024, 1, 5), date(2024, 1, 1)) == 0

    def test_range_ending_on_last_representable_date(self):
        # 9999-12-31 is a Friday
        assert count_business_days(date.max - timedelta(days=1), date.max) == 2

    def test_long_range_counts_whole_weeks(self):
        assert count_business_days(date(2024, 1, 1), date(2024, 1, 1) + timedelta(weeks=52_000, days=-1)) == 260_000


class TestValidateLeaveRequest:
    def test_valid_request_passes(self, leave_request):
        validate_leave_request(leave_request)

    def test_reversed_dates_fail(self):
        # model_construct skips pydantic validation
        request = LeaveRequest.model_construct(
            employee_id="e1", start_date=date(2024, 2, 10), end_date=date(2024, 2, 1), reason=None, id=None
        )
        with pytest.raises(InvalidLeaveRequestError, match="Start date cannot be after end date"):
            validate_leave_request(request)

    def test_missing_date_fails(self):
        request = LeaveRequest.model_construct(
            employee_id="e1", start_date=None, end_date=date(2024, 2, 1), reason=None, id=None
        )
        with pytest.raises(InvalidLeaveRequestError, match="Missing required dates"):
            validate_leave_request(request)


class TestAuditHelpers:
    @pytest.mark.anyio
    async def test_log_decision_records_leave_decision(self, audit_sink, leave_request):
        decision = HRDecision(status=DecisionStatus.APPROVED, reason="fine")
        await log_decision(audit_sink, decision, leave_request, agent_type="leave-approval")

        event = audit_sink.by_kind("LEAVE_DECISION")[0]
        assert event.entity_id == "req-1"
        assert event.metadata == {"agent": "leave-approval", "status": "APPROVED", "reason": "fine"}

    @pytest.mark.anyio
    async def test_error_decision_returns_error_status(self, audit_sink):
        decision = await error_decision(audit_sink, RuntimeError("boom"), "req-9")

        assert decision.status is DecisionStatus.ERROR
        assert decision.reason == "Failed to process request: boom"
        event = audit_sink.by_kind("AGENT_ERROR")[0]
        assert event.entity_id == "req-9"
        assert event.metadata["error_type"] == "RuntimeError"

    @pytest.mark.anyio
    async def test_error_decision_without_message(self, audit_sink):
        decision = await error_decision(audit_sink, RuntimeError(), "req-9")
        assert decision.reason == "Failed to process request: Unknown error occurred"

    @pytest.mark.anyio
    async def test_sink_failure_does_not_escape_leave_helpers(self, leave_request, caplog):
        sink = AsyncMock()
        sink.record.side_effect = RuntimeError("Audit webhook failed: 503")
        approved = HRDecision(status=DecisionStatus.APPROVED, reason="fine")

        with caplog.at_level(logging.ERROR):
            await log_decision(sink, approved, leave_request, agent_type="leave-approval")
            decision = await error_decision(sink, RuntimeError("boom"), "req-9")

        assert decision.status is DecisionStatus.ERROR
        assert sink.record.await_count == 2
        assert "Audit sink failed to record LEAVE_DECISION" in caplog.text
        assert "Audit sink failed to record AGENT_ERROR" in caplog.text
