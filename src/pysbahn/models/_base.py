"""Base model for feed messages and decoded records.

Every pysbahn model inherits from :class:`SbahnBaseModel`, which is
frozen (records are pure derivations of a raw frame and never mutated)
and ignores unknown keys so upstream schema growth does not break
decoding.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SbahnBaseModel(BaseModel):
    """Frozen, extra-tolerant base for pysbahn models."""

    model_config = ConfigDict(frozen=True, extra="ignore")
