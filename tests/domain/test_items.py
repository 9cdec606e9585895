"""Tests for the item capability protocol and the concrete variants."""

from datetime import date

import pytest
from pydantic import ValidationError

from invctl.domain.items import (
    ITEM_MODELS,
    ElectronicItem,
    GroceryItem,
    InventoryItem,
    get_item_model,
    kind_of,
)
from invctl.domain.types import ItemKind


class TestCapabilityProtocol:
    def test_electronic_satisfies_protocol(self) -> None:
        item = ElectronicItem(id=1, name="Laptop", quantity=10, brand="Dell", warranty_months=24)
        assert isinstance(item, InventoryItem)

    def test_grocery_satisfies_protocol(self) -> None:
        item = GroceryItem(id=101, name="Milk", quantity=50, expiry_date=date(2026, 10, 26))
        assert isinstance(item, InventoryItem)

    def test_variants_share_no_base_beyond_pydantic(self) -> None:
        assert not issubclass(GroceryItem, ElectronicItem)
        assert not issubclass(ElectronicItem, GroceryItem)


class TestElectronicItem:
    def test_fields(self) -> None:
        item = ElectronicItem(id=1, name="Laptop", quantity=10, brand="Dell", warranty_months=24)
        assert item.kind == "electronic"
        assert item.brand == "Dell"
        assert item.warranty_months == 24

    def test_frozen(self) -> None:
        item = ElectronicItem(id=1, name="Laptop", quantity=10, brand="Dell", warranty_months=24)
        with pytest.raises(ValidationError):
            item.quantity = 99  # type: ignore[misc]

    def test_with_quantity_returns_copy(self) -> None:
        item = ElectronicItem(id=1, name="Laptop", quantity=10, brand="Dell", warranty_months=24)
        updated = item.with_quantity(15)
        assert updated.quantity == 15
        assert item.quantity == 10
        assert updated.brand == "Dell"
        assert updated.id == item.id

    def test_negative_quantity_allowed_at_construction(self) -> None:
        item = ElectronicItem(id=1, name="Laptop", quantity=-3, brand="Dell", warranty_months=0)
        assert item.quantity == -3

    def test_blank_brand_rejected(self) -> None:
        with pytest.raises(ValidationError, match="brand"):
            ElectronicItem(id=1, name="Laptop", quantity=1, brand="   ", warranty_months=1)

    def test_brand_is_stripped(self) -> None:
        item = ElectronicItem(id=1, name="Laptop", quantity=1, brand=" Dell ", warranty_months=1)
        assert item.brand == "Dell"

    def test_negative_warranty_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ElectronicItem(id=1, name="Laptop", quantity=1, brand="Dell", warranty_months=-1)

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ElectronicItem(id=1, name="", quantity=1, brand="Dell", warranty_months=1)


class TestGroceryItem:
    def test_days_until_expiry(self) -> None:
        item = GroceryItem(id=101, name="Milk", quantity=50, expiry_date=date(2026, 10, 26))
        assert item.days_until_expiry(date(2026, 10, 19)) == 7
        assert not item.is_expired(date(2026, 10, 26))

    def test_expired(self) -> None:
        item = GroceryItem(id=101, name="Milk", quantity=50, expiry_date=date(2026, 10, 1))
        assert item.days_until_expiry(date(2026, 10, 3)) == -2
        assert item.is_expired(date(2026, 10, 3))

    def test_with_quantity_keeps_expiry(self) -> None:
        item = GroceryItem(id=101, name="Milk", quantity=50, expiry_date=date(2026, 10, 26))
        assert item.with_quantity(0).expiry_date == date(2026, 10, 26)

    def test_expiry_parsed_from_iso_string(self) -> None:
        item = GroceryItem.model_validate(
            {"id": 102, "name": "Rice", "quantity": 100, "expiry_date": "2027-04-19"}
        )
        assert item.expiry_date == date(2027, 4, 19)


class TestRegistry:
    def test_every_kind_has_a_model(self) -> None:
        assert set(ITEM_MODELS) == set(ItemKind)

    def test_get_item_model(self) -> None:
        assert get_item_model("electronic") is ElectronicItem
        assert get_item_model("grocery") is GroceryItem

    def test_get_item_model_unknown(self) -> None:
        with pytest.raises(KeyError):
            get_item_model("furniture")

    def test_kind_of(self) -> None:
        assert kind_of(ElectronicItem) is ItemKind.ELECTRONIC
        assert kind_of(GroceryItem) is ItemKind.GROCERY

    def test_kind_of_unregistered(self) -> None:
        with pytest.raises(KeyError):
            kind_of(dict)

    def test_model_kind_tag_matches_registry(self) -> None:
        for kind, model in ITEM_MODELS.items():
            assert model.model_fields["kind"].default == str(kind)
