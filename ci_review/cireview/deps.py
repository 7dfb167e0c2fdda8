"""Shared FastAPI dependencies."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ServiceOptions(BaseModel):
    """Runtime options loaded at startup."""

    similarity_threshold: float = Field(0.8, ge=0.0, le=1.0)
    max_batch_pairs: int = Field(50, ge=1)


_options: ServiceOptions | None = None


def get_options() -> ServiceOptions:
    """FastAPI dependency: return the shared ServiceOptions."""
    assert _options is not None, "ServiceOptions not initialised"
    return _options
