"""BaseService: abstract foundation for gosubmod services.

Every service receives a :class:`Workspace` at construction time.  Domain
errors are caught here and turned into failed ServiceResults, so callers
never see a raised :class:`SubmodError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gosubmod.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from gosubmod.domain.errors import SubmodError
    from gosubmod.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class SubmoduleService(BaseService):
            def add(self, modules: list[str]) -> ServiceResult:
                try:
                    submod_file = self._workspace.load()
                    ...
                except SubmodError as exc:
                    return self._failure("add", exc)
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _failure(self, op: str, exc: SubmodError) -> ServiceResult:
        """Log *exc* and wrap it in a failed ServiceResult."""
        logger.error("%s failed: %s", op, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=str(exc), detail=exc.detail),
        )
