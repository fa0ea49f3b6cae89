"""Tests for row-shaped artifacts."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from botking.core.exceptions import ValidationError
from botking.models.artifacts import (
    Account,
    Asset,
    InventoryStack,
    PlayerAccount,
    Robot,
    Template,
)
from botking.models.enums import AssetKind, ItemClass


@pytest.fixture
def stack() -> InventoryStack:
    """Create an inventory stack of 100."""
    return InventoryStack(shard_id=1, player_id=42, template_id="tpl_1", quantity=100)


@pytest.fixture
def account() -> Account:
    """Create an account carrying every secret."""
    return Account(
        id="account_1",
        user_id="user_1",
        provider_id="github",
        account_id="gh_1",
        password="hunter2",
        access_token="access",
        refresh_token="refresh",
    )


class TestInventoryStack:
    """Tests for inventory arithmetic."""

    def test_operators(self, stack: InventoryStack) -> None:
        """Test in-place arithmetic."""
        stack += 50
        stack -= 25
        stack *= 2
        stack /= 5

        assert stack.quantity == 50

    def test_chaining(self, stack: InventoryStack) -> None:
        """Test named operations return the stack."""
        assert stack.add(10).subtract(5).multiply(3).divide(7).quantity == 45

    def test_division_floors(self, stack: InventoryStack) -> None:
        """Test division is integral."""
        stack //= 3
        assert stack.quantity == 33

    def test_negative_result_raises(self, stack: InventoryStack) -> None:
        """Test going below zero is rejected and leaves the stack unchanged."""
        with pytest.raises(ValidationError):
            stack.subtract(101)

        assert stack.quantity == 100

    def test_negative_construction_raises(self) -> None:
        """Test a negative starting quantity is rejected."""
        with pytest.raises(ValidationError):
            InventoryStack(shard_id=1, player_id=1, template_id="tpl_1", quantity=-1)

    def test_divide_by_zero(self, stack: InventoryStack) -> None:
        """Test division by zero raises a domain error."""
        with pytest.raises(ValidationError) as exc_info:
            stack.divide(0)

        assert "zero" in exc_info.value.message

    @pytest.mark.parametrize("operand", [1.5, "2", True])
    def test_non_integer_operand(self, stack: InventoryStack, operand: object) -> None:
        """Test non-integer operands are rejected."""
        with pytest.raises(ValidationError):
            stack.add(operand)  # type: ignore[arg-type]

    def test_is_empty(self, stack: InventoryStack) -> None:
        """Test emptiness follows quantity."""
        assert stack.is_empty is False
        assert stack.subtract(100).is_empty is True

    def test_round_trip(self, stack: InventoryStack) -> None:
        """Test ids and quantities stay JSON integers."""
        data = stack.to_json()

        assert data["shard_id"] == 1
        assert data["quantity"] == 100
        assert InventoryStack.from_json(data) == stack

    def test_clone_is_independent(self, stack: InventoryStack) -> None:
        """Test a clone can change without touching the original."""
        twin = stack.clone()
        twin += 1

        assert twin.quantity == 101
        assert stack.quantity == 100


class TestTemplateAndAsset:
    """Tests for catalog artifacts."""

    def test_slug_from_name(self) -> None:
        """Test an empty slug is derived from the name."""
        template = Template(item_class=ItemClass.PART, name="Iron  Arm Mk2")
        assert template.slug == "iron-arm-mk2"

    def test_explicit_slug_kept(self) -> None:
        """Test a given slug is not replaced."""
        template = Template(item_class=ItemClass.PART, name="Iron Arm", slug="arm-01")
        assert template.slug == "arm-01"

    def test_meta_is_copied(self) -> None:
        """Test mutating the caller's dict does not leak in."""
        meta = {"tags": ["starter"]}
        template = Template(item_class=ItemClass.SKELETON, name="Frame", meta=meta)

        meta["tags"].append("changed")

        assert template.meta == {"tags": ["starter"]}

    def test_template_round_trip(self) -> None:
        """Test a template rebuilds from its projection."""
        template = Template(item_class=ItemClass.SOUL_CHIP, name="Core", meta={"tier": 2})
        assert Template.from_json(template.to_json()) == template

    def test_asset_round_trip(self) -> None:
        """Test an asset rebuilds with ISO dates."""
        asset = Asset(
            pack_id="pack_1",
            kind=AssetKind.SPRITE,
            url="https://cdn.example.com/a.png",
            width=64,
            height=64,
            meta={"frames": 4},
        )
        data = asset.to_json()

        assert datetime.fromisoformat(data["created_at"]) == asset.created_at
        assert data["kind"] == "SPRITE"
        assert Asset.from_json(data) == asset

    def test_asset_dimensions_not_negative(self) -> None:
        """Test negative dimensions are rejected."""
        with pytest.raises(PydanticValidationError):
            Asset(pack_id="p", kind=AssetKind.ICON, url="u", width=-1)

    def test_clone_copies_meta(self) -> None:
        """Test cloned meta is independent."""
        asset = Asset(pack_id="p", kind=AssetKind.CARD, url="u", meta={"layers": [1]})
        twin = asset.clone()

        twin.meta["layers"].append(2)

        assert asset.meta == {"layers": [1]}


class TestPlayers:
    """Tests for robot and player account rows."""

    def test_robot_round_trip(self) -> None:
        """Test a robot rebuilds from its projection."""
        robot = Robot(shard_id=3, player_id=9001, nickname="Bolt")
        assert Robot.deserialize(robot.serialize()) == robot

    def test_player_account_round_trip(self) -> None:
        """Test a player account rebuilds from its projection."""
        link = PlayerAccount(shard_id=3, player_id=9001, global_player_id="global_1")
        data = link.to_json()

        assert data["player_id"] == 9001
        assert PlayerAccount.from_json(data) == link


class TestAccount:
    """Tests for provider accounts."""

    def test_to_json_redacts_secrets(self, account: Account) -> None:
        """Test set secrets are redacted and unset ones stay null."""
        data = account.to_json()

        assert data["password"] == "[REDACTED]"
        assert data["access_token"] == "[REDACTED]"
        assert data["id_token"] is None
        assert json.loads(account.serialize())["refresh_token"] == "[REDACTED]"

    def test_to_record_is_lossless(self, account: Account) -> None:
        """Test the record keeps secrets for storage."""
        record = account.to_record()

        assert record["password"] == "hunter2"
        assert Account.from_json(record) == account

    def test_token_expiry(self, account: Account) -> None:
        """Test expiry checks against the given time."""
        now = datetime(2025, 1, 1, 12, 0)
        account.update_tokens(
            access_token_expires_at=now - timedelta(minutes=1),
            refresh_token_expires_at=now + timedelta(days=30),
        )

        assert account.is_token_expired("access", now=now) is True
        assert account.is_token_expired("refresh", now=now) is False

    def test_token_without_expiry(self, account: Account) -> None:
        """Test a token without an expiry never expires."""
        assert account.is_token_expired("access") is False

    def test_unknown_token_type(self, account: Account) -> None:
        """Test an unknown token type is rejected."""
        with pytest.raises(ValidationError):
            account.is_token_expired("session")  # type: ignore[arg-type]

    def test_update_tokens_reports_changes(self, account: Account) -> None:
        """Test only supplied tokens change."""
        changed = account.update_tokens(access_token="new")

        assert changed == ["access_token"]
        assert account.access_token == "new"
        assert account.refresh_token == "refresh"

    def test_update_password(self, account: Account) -> None:
        """Test password updates reject empty values."""
        account.update_password("correct horse")
        assert account.password == "correct horse"

        with pytest.raises(ValidationError):
            account.update_password("")
