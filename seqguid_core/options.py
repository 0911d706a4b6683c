"""
seqguid_core/options.py - Generation parameters

Collects the optional inputs of identifier generation in one validated
object. Defaults:

    base        absent -> fresh random 128-bit value
    created_at  absent -> current UTC time at generation
    seed        absent -> cryptographic randomness; set -> seeded PRNG
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GenerationOptions(BaseModel):
    """Inputs for one call to seqguid_core.guid.generate()."""

    model_config = ConfigDict(frozen=True)

    base: Optional[UUID] = Field(
        default=None,
        description="Existing GUID whose ten non-timestamp bytes are kept.",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        description="Point in time to embed. Naive values are read as UTC.",
    )
    reversed_byte_order: bool = Field(
        default=True,
        description="True: SQL Server layout (last six bytes). "
                    "False: forward layout (first six bytes).",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for a deterministic base. Reproducible tests only.",
    )

    @model_validator(mode="after")
    def validate_single_base_source(self) -> "GenerationOptions":
        if self.base is not None and self.seed is not None:
            raise ValueError("base and seed are mutually exclusive")
        return self
