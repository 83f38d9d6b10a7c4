"""CompletionService — name suggestions for shell completion."""

from __future__ import annotations

from pwctl.domain.completion import suggest
from pwctl.domain.errors import PwctlError
from pwctl.services.base import BaseService
from pwctl.services.result import ServiceResult
from pwctl.services.telemetry import traced


class CompletionService(BaseService):
    """Suggest entry names derived from what is already in the store."""

    @traced
    def suggest(self, needle: str) -> ServiceResult:
        """Return candidates for *needle*; an empty needle yields no candidates."""
        items: list[str] = []
        if needle:
            try:
                names = self._store.list()
            except PwctlError as exc:
                return ServiceResult.failure("complete", exc)
            items = suggest(names, needle)

        return ServiceResult(
            ok=True,
            op="complete",
            data={"needle": needle, "items": items, "count": len(items)},
        )
