"""Return types of SubmoduleService.

Services never raise for domain failures: a failed command is a
ServiceResult with ``ok=False`` and a ServiceError whose ``code`` is the
error kind (e.g. ``MISSING_SUBMODULE_DIRECTORY``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Error kind, message and the manifest/modules context of a failure."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one command.

    ``op`` is the command name (``list``, ``add``, ``drop``, ``fmt``) and
    selects the renderer; ``data`` holds its payload and ``warnings`` the
    messages printed to stderr.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
