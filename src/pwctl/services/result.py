"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All public service methods return ServiceResult.
Error codes come from :mod:`pwctl.domain.errors` and map onto exit statuses.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pwctl.domain.errors import PwctlError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: PwctlError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"generate"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        exc: PwctlError,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Build a failed result from a raised :class:`PwctlError`."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
            warnings=list(warnings or []),
        )
