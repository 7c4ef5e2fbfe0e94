from __future__ import annotations


class HRAutopilotError(Exception):
    pass


class InvalidLeaveRequestError(HRAutopilotError):
    pass


class ProviderError(HRAutopilotError):
    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"[{operation}] {message}")
        self.operation = operation


class MalformedResponseError(HRAutopilotError):
    def __init__(self, message: str, raw_text: str | None) -> None:
        super().__init__(f"{message}: {raw_text!r}")
        self.raw_text = raw_text


class OverrideNotAuthorizedError(HRAutopilotError):
    pass
