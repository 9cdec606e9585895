"""Item capability protocol and the concrete item variants.

The repository only relies on the :class:`InventoryItem` capability set:
a stable ``id``, a display ``name``, a ``quantity``, and a way to produce
a copy carrying a new quantity. Variants are independent frozen models
that share no implementation; each validates its own fields.

INVARIANT: Items are immutable. Quantity changes produce a new item via
``with_quantity()``, and only the repository decides when to apply one.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Literal, Protocol, Self, runtime_checkable

from pydantic import BaseModel, Field, field_validator

from invctl.domain.types import ItemKind


@runtime_checkable
class InventoryItem(Protocol):
    """Capability set every storable item satisfies."""

    @property
    def id(self) -> int: ...

    @property
    def name(self) -> str: ...

    @property
    def quantity(self) -> int: ...

    def with_quantity(self, quantity: int) -> Self:
        """Return a copy of this item carrying *quantity*."""
        ...


def _today() -> date:
    return datetime.now(UTC).date()


class ElectronicItem(BaseModel):
    """Durable good with a brand and a warranty period."""

    model_config = {"frozen": True}

    kind: Literal["electronic"] = "electronic"
    id: int
    name: str = Field(min_length=1)
    quantity: int
    brand: str
    warranty_months: int = Field(ge=0)

    @field_validator("brand")
    @classmethod
    def _brand_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "brand must not be blank"
            raise ValueError(msg)
        return value

    def with_quantity(self, quantity: int) -> Self:
        return self.model_copy(update={"quantity": quantity})


class GroceryItem(BaseModel):
    """Perishable good with an expiry date."""

    model_config = {"frozen": True}

    kind: Literal["grocery"] = "grocery"
    id: int
    name: str = Field(min_length=1)
    quantity: int
    expiry_date: date

    def with_quantity(self, quantity: int) -> Self:
        return self.model_copy(update={"quantity": quantity})

    def days_until_expiry(self, on: date | None = None) -> int:
        """Days from *on* (default: today, UTC) until the expiry date.

        Negative once the item has expired.
        """
        return (self.expiry_date - (on or _today())).days

    def is_expired(self, on: date | None = None) -> bool:
        return self.days_until_expiry(on) < 0


# Variant model per kind. Both directions are needed: the CLI resolves a
# kind tag to a model, storage writes the tag for a model.
ITEM_MODELS: dict[ItemKind, type[ElectronicItem] | type[GroceryItem]] = {
    ItemKind.ELECTRONIC: ElectronicItem,
    ItemKind.GROCERY: GroceryItem,
}


def get_item_model(kind: str) -> type[ElectronicItem] | type[GroceryItem]:
    """Resolve a kind tag to its model class.

    Raises:
        KeyError: If *kind* is not a known item kind.
    """
    try:
        return ITEM_MODELS[ItemKind(kind)]
    except ValueError:
        raise KeyError(kind) from None


def kind_of(item_type: type) -> ItemKind:
    """Return the kind tag for a variant model class.

    Raises:
        KeyError: If *item_type* is not a registered variant.
    """
    for kind, model in ITEM_MODELS.items():
        if model is item_type:
            return kind
    raise KeyError(item_type.__name__)
