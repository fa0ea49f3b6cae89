"""Shared pydantic base for domain models.

Every domain model mutates through validated assignment and serializes to
a plain JSON-compatible dict (dates as ISO-8601 strings) that a persistence
collaborator can map to and from its rows.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for mutable domain models.

    Models are pure data plus the rules that keep that data consistent.
    Nothing here performs I/O.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )

    def to_json(self) -> dict[str, Any]:
        """Plain key-value projection of the model."""
        return self.model_dump(mode="json")

    def serialize(self) -> str:
        """JSON string of ``to_json()``."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Self:
        """Rebuild an instance from a ``to_json()`` projection."""
        return cls.model_validate(data)

    @classmethod
    def deserialize(cls, raw: str) -> Self:
        """Rebuild an instance from a ``serialize()`` string."""
        return cls.model_validate_json(raw)


class ValueModel(DomainModel):
    """Base class for immutable value objects."""

    model_config = ConfigDict(frozen=True, extra="ignore")


__all__ = ["DomainModel", "ValueModel"]
