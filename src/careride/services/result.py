"""ServiceResult: what every careride service method returns.

Expected refusals (unknown doctor, invalid plan, refused transition, no
subscription) come back as ``ok=False`` results carrying an
:class:`ErrorCode`; services do not raise for them. The CLI maps a
rejected result to exit code 1.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_PLAN = "INVALID_PLAN"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    SUBSCRIPTION_REQUIRED = "SUBSCRIPTION_REQUIRED"
    INVALID_MESSAGE = "INVALID_MESSAGE"
    QUERY_TOO_LONG = "QUERY_TOO_LONG"
    INVALID_SPECIALTY = "INVALID_SPECIALTY"
    INVALID_LIMIT = "INVALID_LIMIT"
    INVALID_PROFILE = "INVALID_PROFILE"


class ServiceError(BaseModel):
    """Why a result was rejected; *detail* holds machine-readable context."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when the operation was refused.
        op: Operation name (``"search"``, ``"boost_purchase"``); renderers
            dispatch on it.
        data: JSON-ready payload of an accepted result.
        warnings: Notes about an accepted result, e.g. a replaced
            subscription.
        error: Set on rejected results only.
        meta: Extra diagnostics; ``meta["telemetry"]`` under ``-v``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(cls, op: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    @property
    def error_code(self) -> ErrorCode | None:
        return self.error.code if self.error else None

    def with_warning(self, warning: str) -> ServiceResult:
        """A copy of this result with *warning* appended."""
        return self.model_copy(update={"warnings": [*self.warnings, warning]})
