"""InventoryService — warehouse operations over the typed repositories.

Each method resolves the kind, drives the repository, and translates
the repository ``Outcome`` into a :class:`ServiceResult`. Mutations are
saved only when the repository reports success, so a failed operation
never rewrites a store file.

Batch imports isolate per-item failures: a duplicate id is skipped and
reported as a warning, the rest of the batch still lands.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from invctl.domain.items import ITEM_MODELS, GroceryItem
from invctl.domain.types import ItemKind
from invctl.infrastructure.storage import load_items, save_items
from invctl.infrastructure.warehouse import bulk_insert
from invctl.services.base import BaseService, storage_guarded
from invctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _dump(item: Any) -> dict[str, Any]:
    return item.model_dump(mode="json")


class InventoryService(BaseService):
    """Add, inspect, adjust, and move stock for one item kind at a time."""

    # ------------------------------------------------------------------
    # Single-item operations
    # ------------------------------------------------------------------

    @storage_guarded("add_item")
    def add_item(self, kind: str, fields: dict[str, Any]) -> ServiceResult:
        """Validate *fields* into the kind's model and insert it."""
        op = "add_item"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        try:
            item = ITEM_MODELS[item_kind].model_validate({**fields, "kind": str(item_kind)})
        except ValidationError as exc:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            ]
            return ServiceResult.fail(op, "INVALID_ITEM", "; ".join(errors), errors=errors)

        outcome = self._warehouse.repository(item_kind).insert(item)
        if outcome.error is not None:
            return ServiceResult.from_repository(op, outcome.error)

        path = self._warehouse.save(item_kind)
        logger.info("Added %s item %d", item_kind, item.id)
        return ServiceResult(
            ok=True,
            op=op,
            data={"kind": str(item_kind), "item": _dump(item)},
            meta={"path": str(path)},
        )

    @storage_guarded("get_item")
    def get_item(self, kind: str, item_id: int) -> ServiceResult:
        op = "get_item"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        outcome = self._warehouse.repository(item_kind).get(item_id)
        if outcome.error is not None:
            return ServiceResult.from_repository(op, outcome.error)
        return ServiceResult(
            ok=True, op=op, data={"kind": str(item_kind), "item": _dump(outcome.value)}
        )

    @storage_guarded("remove_item")
    def remove_item(self, kind: str, item_id: int) -> ServiceResult:
        op = "remove_item"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        outcome = self._warehouse.repository(item_kind).remove(item_id)
        if outcome.error is not None:
            return ServiceResult.from_repository(op, outcome.error)

        self._warehouse.save(item_kind)
        logger.info("Removed %s item %d", item_kind, item_id)
        return ServiceResult(
            ok=True, op=op, data={"kind": str(item_kind), "item": _dump(outcome.value)}
        )

    @storage_guarded("set_quantity")
    def set_quantity(self, kind: str, item_id: int, quantity: int) -> ServiceResult:
        op = "set_quantity"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        outcome = self._warehouse.repository(item_kind).update_quantity(item_id, quantity)
        if outcome.error is not None:
            return ServiceResult.from_repository(op, outcome.error)

        self._warehouse.save(item_kind)
        return ServiceResult(
            ok=True, op=op, data={"kind": str(item_kind), "item": _dump(outcome.value)}
        )

    @storage_guarded("increase_stock")
    def increase_stock(self, kind: str, item_id: int, delta: int) -> ServiceResult:
        """Add *delta* to the current quantity (get, then update).

        The read and the write are separate repository calls; nothing
        else can interleave in single-threaded use. A negative *delta*
        that would drive stock below zero fails with INVALID_QUANTITY.
        """
        op = "increase_stock"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        repo = self._warehouse.repository(item_kind)
        current = repo.get(item_id)
        if current.error is not None:
            return ServiceResult.from_repository(op, current.error)

        previous = current.unwrap().quantity
        outcome = repo.update_quantity(item_id, previous + delta)
        if outcome.error is not None:
            return ServiceResult.from_repository(op, outcome.error)

        self._warehouse.save(item_kind)
        logger.info(
            "Increased %s item %d by %d (now %d)", item_kind, item_id, delta, previous + delta
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "kind": str(item_kind),
                "item": _dump(outcome.value),
                "previous_quantity": previous,
                "delta": delta,
            },
        )

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    @storage_guarded("list_items")
    def list_items(self, kind: str) -> ServiceResult:
        """List all items in insertion order.

        Items at or below ``stock.low_stock_threshold`` are flagged in
        ``low_stock``. For groceries, expired or soon-to-expire items
        produce warnings.
        """
        op = "list_items"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        stock_cfg = self._warehouse.settings.stock
        items = self._warehouse.repository(item_kind).list_all()
        low_stock = [item.id for item in items if item.quantity <= stock_cfg.low_stock_threshold]

        warnings: list[str] = []
        today = datetime.now(UTC).date()
        for item in items:
            if not isinstance(item, GroceryItem):
                continue
            days = item.days_until_expiry(today)
            if days < 0:
                warnings.append(f"Item {item.id} ({item.name}) expired {-days} day(s) ago")
            elif days <= stock_cfg.expiry_warning_days:
                warnings.append(f"Item {item.id} ({item.name}) expires in {days} day(s)")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "kind": str(item_kind),
                "count": len(items),
                "items": [_dump(item) for item in items],
                "low_stock": low_stock,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Bulk transfer
    # ------------------------------------------------------------------

    @storage_guarded("import_items")
    def import_items(self, kind: str, source: Path) -> ServiceResult:
        """Bulk-load items from a JSON store file via repeated insert.

        Duplicate ids (against the warehouse or earlier records in the
        same file) are skipped and reported; they never abort the batch.
        """
        op = "import_items"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)
        if not source.is_file():
            return ServiceResult.fail(
                op, "STORAGE_ERROR", f"No such file: {source}", path=str(source)
            )

        repo = self._warehouse.repository(item_kind)
        records = load_items(source, repo.item_type)
        errors = bulk_insert(repo, records)
        imported = len(records) - len(errors)

        if imported:
            self._warehouse.save(item_kind)
        logger.info("Imported %d %s item(s) from %s", imported, item_kind, source)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "kind": str(item_kind),
                "imported": imported,
                "skipped": [e.item_id for e in errors],
            },
            warnings=[f"Skipped: {e.message}" for e in errors],
        )

    @storage_guarded("export_items")
    def export_items(self, kind: str, destination: Path) -> ServiceResult:
        """Write all items of *kind* to *destination* in store format."""
        op = "export_items"
        item_kind = self._resolve_kind(kind)
        if item_kind is None:
            return self._unknown_kind(op, kind)

        repo = self._warehouse.repository(item_kind)
        items = repo.list_all()
        save_items(
            destination, items, repo.item_type, indent=self._warehouse.settings.storage.indent
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"kind": str(item_kind), "count": len(items), "path": str(destination)},
        )
