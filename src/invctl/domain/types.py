"""Item kinds stored in the warehouse.

One repository exists per kind; the tag also appears in every
serialized record so stored files are self-describing.
"""

from __future__ import annotations

from enum import StrEnum


class ItemKind(StrEnum):
    """Variant tags for inventory items."""

    ELECTRONIC = "electronic"
    GROCERY = "grocery"
