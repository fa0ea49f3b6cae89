"""Row-shaped artifacts: inventory, templates, assets, robots and accounts.

These models mirror persisted rows one to one so a storage collaborator can
map them losslessly. They hold no references to each other, only ids.

Dates serialize as ISO-8601 strings and ids/quantities stay JSON integers.
``meta`` dictionaries are deep-copied on the way in, so mutating the dict a
caller passed never leaks into the artifact.

Example:
    >>> stack = InventoryStack(shard_id=1, player_id=42, template_id="tpl_1", quantity=100)
    >>> stack += 50
    >>> stack -= 25
    >>> stack *= 2
    >>> stack /= 5
    >>> stack.quantity
    50
"""

from __future__ import annotations

import copy
import json
from datetime import datetime
from typing import Any, Literal, Self
from uuid import uuid4

from pydantic import Field, field_validator

from botking.core.constants import REDACTED
from botking.core.exceptions import ValidationError
from botking.core.logging import get_logger
from botking.models.base import DomainModel
from botking.models.enums import AssetKind, ItemClass


logger = get_logger(__name__)


class Artifact(DomainModel):
    """Base for persisted artifacts, carrying the row timestamps."""

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def touch(self) -> None:
        self.updated_at = datetime.now()

    def clone(self) -> Self:
        """Independent copy with equal fields."""
        return self.model_copy(deep=True)


def _copy_meta(value: dict[str, Any] | None) -> dict[str, Any]:
    return copy.deepcopy(value) if value else {}


# =============================================================================
# Inventory
# =============================================================================


class InventoryStack(Artifact):
    """A player's holding of one template.

    Quantity arithmetic is integral: division floors. Any operation that
    would take the quantity below zero raises ValidationError and leaves
    the stack unchanged.
    """

    id: str = ""
    shard_id: int
    player_id: int
    template_id: str
    quantity: int = 0

    @field_validator("quantity", mode="after")
    @classmethod
    def check_quantity(cls, value: int) -> int:
        if value < 0:
            raise ValidationError(
                "Inventory quantity cannot be negative",
                field_name="quantity",
                invalid_value=value,
            )
        return value

    @staticmethod
    def _operand(amount: Any) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(
                "Inventory arithmetic requires an integer",
                field_name="quantity",
                invalid_value=amount,
            )
        return amount

    def _set_quantity(self, value: int) -> Self:
        self.quantity = value
        self.touch()
        return self

    def add(self, amount: int) -> Self:
        return self._set_quantity(self.quantity + self._operand(amount))

    def subtract(self, amount: int) -> Self:
        return self._set_quantity(self.quantity - self._operand(amount))

    def multiply(self, factor: int) -> Self:
        return self._set_quantity(self.quantity * self._operand(factor))

    def divide(self, divisor: int) -> Self:
        """Floor-divide the quantity.

        Raises:
            ValidationError: If ``divisor`` is zero or not an integer.
        """
        if self._operand(divisor) == 0:
            raise ValidationError("Cannot divide inventory by zero", field_name="quantity")
        return self._set_quantity(self.quantity // divisor)

    def __iadd__(self, amount: int) -> Self:
        return self.add(amount)

    def __isub__(self, amount: int) -> Self:
        return self.subtract(amount)

    def __imul__(self, factor: int) -> Self:
        return self.multiply(factor)

    def __ifloordiv__(self, divisor: int) -> Self:
        return self.divide(divisor)

    def __itruediv__(self, divisor: int) -> Self:
        return self.divide(divisor)

    @property
    def is_empty(self) -> bool:
        return self.quantity == 0


# =============================================================================
# Catalog
# =============================================================================


class Template(Artifact):
    """Catalog definition of an item class."""

    id: str = Field(default_factory=lambda: f"tpl_{uuid4().hex[:12]}")
    item_class: ItemClass
    name: str
    slug: str = ""
    meta: dict[str, Any] = Field(default_factory=dict)

    @field_validator("meta", mode="before")
    @classmethod
    def own_meta(cls, value: Any) -> Any:
        return _copy_meta(value)

    def model_post_init(self, __context: Any) -> None:
        if not self.slug:
            self.slug = "-".join(self.name.lower().split())


class Asset(Artifact):
    """A visual resource attached to a template pack."""

    id: str = Field(default_factory=lambda: f"asset_{uuid4().hex[:12]}")
    pack_id: str
    kind: AssetKind
    url: str
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)
    variant: str | None = None
    meta: dict[str, Any] = Field(default_factory=dict)

    @field_validator("meta", mode="before")
    @classmethod
    def own_meta(cls, value: Any) -> Any:
        return _copy_meta(value)


# =============================================================================
# Players
# =============================================================================


class Robot(Artifact):
    """A player's robot row on a shard."""

    id: str = Field(default_factory=lambda: f"robot_{uuid4().hex[:12]}")
    shard_id: int
    player_id: int
    nickname: str | None = None


class PlayerAccount(Artifact):
    """Links a shard-local player id to the global player."""

    id: str = ""
    shard_id: int
    player_id: int
    global_player_id: str


_SECRET_FIELDS = ("password", "access_token", "refresh_token", "id_token")


class Account(Artifact):
    """Authentication provider account of a user.

    ``to_json()`` and ``serialize()`` replace every set secret with
    ``[REDACTED]``. Use ``to_record()`` for the unredacted row.
    """

    id: str = Field(default_factory=lambda: f"account_{uuid4().hex[:12]}")
    user_id: str
    provider_id: str
    account_id: str
    password: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    access_token_expires_at: datetime | None = None
    refresh_token_expires_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> dict[str, Any]:
        data = self.to_record()
        for key in _SECRET_FIELDS:
            if data.get(key):
                data[key] = REDACTED
        return data

    def serialize(self) -> str:
        return json.dumps(self.to_json())

    def is_token_expired(
        self,
        token_type: Literal["access", "refresh"],
        now: datetime | None = None,
    ) -> bool:
        """Check a token expiry. A token without an expiry never expires.

        Raises:
            ValidationError: If ``token_type`` is not "access" or "refresh".
        """
        if token_type == "access":
            expires_at = self.access_token_expires_at
        elif token_type == "refresh":
            expires_at = self.refresh_token_expires_at
        else:
            raise ValidationError(
                f"Unknown token type: {token_type}",
                field_name="token_type",
                invalid_value=token_type,
            )
        if expires_at is None:
            return False
        current = now or datetime.now(expires_at.tzinfo)
        return expires_at <= current

    def update_tokens(
        self,
        *,
        access_token: str | None = None,
        refresh_token: str | None = None,
        id_token: str | None = None,
        access_token_expires_at: datetime | None = None,
        refresh_token_expires_at: datetime | None = None,
    ) -> list[str]:
        """Replace the given tokens and expiries. Returns the names updated."""
        updates = {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "id_token": id_token,
            "access_token_expires_at": access_token_expires_at,
            "refresh_token_expires_at": refresh_token_expires_at,
        }
        changed = [name for name, value in updates.items() if value is not None]
        for name in changed:
            setattr(self, name, updates[name])
        if changed:
            self.touch()
        logger.info("Account tokens updated", account_id=self.id, tokens=changed)
        return changed

    def update_password(self, password: str) -> None:
        if not password:
            raise ValidationError("Password cannot be empty", field_name="password")
        self.password = password
        self.touch()
        logger.info("Account password updated", account_id=self.id)


__all__ = [
    "Artifact",
    "InventoryStack",
    "Template",
    "Asset",
    "Robot",
    "PlayerAccount",
    "Account",
]
