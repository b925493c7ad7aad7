from __future__ import annotations

from enum import Enum
from pydantic import BaseModel, Field


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    SKIPPED = "skipped"


class CompatibilityIssue(BaseModel):
    code: str
    label: str
    message: str
    slots: list[str] = Field(default_factory=list)
    suggestion: str | None = None


class CheckOutcome(BaseModel):
    code: str
    label: str
    status: CheckStatus
    detail: str = ""


class CompatibilityStatus(str, Enum):
    OK = "OK"
    WARNINGS = "WARNINGS"


class CompatibilityReport(BaseModel):
    status: CompatibilityStatus
    issues: list[CompatibilityIssue] = Field(default_factory=list)
    checks: list[CheckOutcome] = Field(default_factory=list)
    checks_passed: int = 0
    checks_skipped: int = 0
    checks_total: int = 0

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues]
