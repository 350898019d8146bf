"""
Base Pydantic models for goodtimes.

Provides common configuration and base classes for all goodtimes models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GoodtimesBaseModel(BaseModel):
    """Base model for all goodtimes Pydantic models.

    Configuration:
        - strict: Strict type coercion (no implicit conversions)
        - validate_assignment: Validate on attribute assignment
        - extra: Reject unknown fields
        - populate_by_name: Allow field aliases
        - use_enum_values: Serialize enums as values
        - revalidate_instances: Trust model instances (performance)
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ImmutableModel(GoodtimesBaseModel):
    """Immutable base model for DTOs that should not change after creation."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ExternalModel(BaseModel):
    """Base model for documents produced by cargo.

    Cargo's JSON carries many fields goodtimes never reads and uses ints
    where floats are expected, so coercion is allowed and unknown keys are
    ignored.
    """

    model_config = ConfigDict(
        strict=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )
