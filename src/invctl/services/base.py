"""BaseService — foundation for invctl services.

Every service receives a :class:`Warehouse` at construction time. The
Warehouse hands out per-kind repositories and persists them on request;
services decide when a change is worth saving.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Concatenate, ParamSpec

from invctl.domain.types import ItemKind
from invctl.infrastructure.storage import StorageError
from invctl.services.result import ServiceResult

if TYPE_CHECKING:
    from invctl.infrastructure.warehouse import Warehouse

logger = logging.getLogger(__name__)

P = ParamSpec("P")


def storage_guarded(
    op: str,
) -> Callable[
    [Callable[Concatenate[BaseService, P], ServiceResult]],
    Callable[Concatenate[BaseService, P], ServiceResult],
]:
    """Convert a :class:`StorageError` raised inside *op* into a failed result.

    An unreadable store file is reported once, with its path, instead of
    every service method handling it separately.
    """

    def decorator(
        fn: Callable[Concatenate[BaseService, P], ServiceResult],
    ) -> Callable[Concatenate[BaseService, P], ServiceResult]:
        @functools.wraps(fn)
        def wrapper(self: BaseService, *args: P.args, **kwargs: P.kwargs) -> ServiceResult:
            try:
                return fn(self, *args, **kwargs)
            except StorageError as exc:
                logger.warning("Storage failure during %s: %s", op, exc)
                return ServiceResult.fail(op, "STORAGE_ERROR", str(exc), path=str(exc.path))

        return wrapper

    return decorator


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class InventoryService(BaseService):
            def get_item(self, kind: str, item_id: int) -> ServiceResult:
                repo = self._warehouse.repository(ItemKind(kind))
                ...
    """

    def __init__(self, warehouse: Warehouse) -> None:
        self._warehouse = warehouse

    @staticmethod
    def _resolve_kind(kind: str) -> ItemKind | None:
        try:
            return ItemKind(kind)
        except ValueError:
            return None

    @staticmethod
    def _unknown_kind(op: str, kind: str) -> ServiceResult:
        valid = [str(k) for k in ItemKind]
        return ServiceResult.fail(op, "UNKNOWN_KIND", f"Unknown item kind: {kind!r}", valid=valid)
