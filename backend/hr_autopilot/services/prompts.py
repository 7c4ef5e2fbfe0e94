"""System instructions and user payloads for the three model-backed workflows.

Values are interpolated as-is; callers hand in validated models.
"""

from __future__ import annotations

import json

from hr_autopilot.models.hr import ComplianceSnapshot, Employee, LeaveContext, LeaveRequest

DEFAULT_EXPERIENCE_LEVEL = "Mid-level"

LEAVE_SYSTEM_PROMPT = (
    "You are an HR autopilot specializing in leave approvals.\n"
    "Consider these factors:\n"
    "1. Employee's remaining leave balance\n"
    "2. Team coverage during leave period\n"
    "3. Impact on critical projects\n\n"
    "Respond with JSON only: {\n"
    '  "status": "APPROVED"|"DENIED"|"FLAGGED",\n'
    '  "reason": string,\n'
    '  "confidence": number between 0 and 1\n'
    "}"
)

COMPLIANCE_SYSTEM_PROMPT = (
    "Analyze HR data for compliance issues. Check for:\n"
    "1. Working hour violations (>40h/week)\n"
    "2. Contract discrepancies and missing contract elements\n"
    "3. Leave policy breaches\n\n"
    "Respond with JSON: {\n"
    '  "issues": Array<{\n'
    '    "type": string,\n'
    '    "severity": "HIGH"|"MEDIUM"|"LOW",\n'
    '    "description": string,\n'
    '    "suggested_actions": string[]\n'
    "  }>\n"
    "}\n"
    'Return {"issues": []} when nothing is found.'
)

ONBOARDING_SYSTEM_PROMPT_TEMPLATE = (
    "You create structured onboarding plans for new hires.\n"
    "Create a {duration}-day onboarding plan. Include:\n"
    "1. Training sessions\n"
    "2. Required documentation\n"
    "3. Key introductions\n\n"
    "Respond with JSON format: {{\n"
    '  "plan": Array<{{\n'
    '    "day": number,\n'
    '    "activities": string[],\n'
    '    "goals": string[]\n'
    "  }}>\n"
    "}}"
)


def _messages(system_prompt: str, user_content: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_content},
    ]


def build_leave_messages(
    request: LeaveRequest,
    employee: Employee,
    context: LeaveContext,
) -> list[dict[str, str]]:
    projects = ", ".join(context.critical_projects) if context.critical_projects else "None"
    user_content = (
        "Leave Request:\n"
        f"- Employee: {employee.name} ({employee.leave_balance:g} days remaining)\n"
        f"- Dates: {request.start_date.isoformat()} to {request.end_date.isoformat()}\n"
        f"- Reason: {request.reason or 'Not specified'}\n\n"
        "Context:\n"
        f"- Team coverage during period: {context.team_coverage:g}%\n"
        f"- Critical projects affected: {projects}"
    )
    return _messages(LEAVE_SYSTEM_PROMPT, user_content)


def build_compliance_messages(snapshot: ComplianceSnapshot) -> list[dict[str, str]]:
    payload = json.dumps(snapshot.model_dump(mode="json"), indent=2)
    return _messages(COMPLIANCE_SYSTEM_PROMPT, payload)


def build_onboarding_messages(employee: Employee, duration_days: int) -> list[dict[str, str]]:
    system_prompt = ONBOARDING_SYSTEM_PROMPT_TEMPLATE.format(duration=duration_days)
    user_content = (
        "New employee:\n"
        f"- Role: {employee.role}\n"
        f"- Department: {employee.department}\n"
        f"- Experience Level: {employee.experience_level or DEFAULT_EXPERIENCE_LEVEL}"
    )
    return _messages(system_prompt, user_content)
