"""Error payload returned for unhandled failures."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """Body of a 500 response; ``error_id`` correlates it with the server log."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    message: str = "An unexpected error occurred."
    status_code: int = 500
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    details: str | None = None
