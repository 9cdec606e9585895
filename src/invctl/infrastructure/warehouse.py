"""Warehouse — one typed repository per item kind, plus their store files.

The Warehouse is the single dependency injected into every service.
Repositories are loaded lazily from ``{root}/{storage.directory}/{kind}.json``
on first access, so commands that never touch a kind never read its file.
Writes happen only when a service calls :meth:`Warehouse.save`. Items are
frozen, so the last saved list doubles as the rollback point when a
write fails.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from invctl.domain.errors import RepositoryError
from invctl.domain.items import ITEM_MODELS
from invctl.domain.types import ItemKind
from invctl.infrastructure.repository import T, TypedRepository
from invctl.infrastructure.storage import StorageError, load_items, save_items

if TYPE_CHECKING:
    from invctl.config.settings import InvSettings

logger = logging.getLogger(__name__)


def bulk_insert(repo: TypedRepository[T], items: Iterable[T]) -> list[RepositoryError]:
    """Insert each item, collecting failures instead of stopping.

    Returns the errors for items that were not stored (duplicates).
    """
    errors: list[RepositoryError] = []
    for item in items:
        outcome = repo.insert(item)
        if outcome.error is not None:
            errors.append(outcome.error)
    return errors


class Warehouse:
    """Per-kind repositories backed by JSON files under the data directory.

    Constructed lazily by the CLI context from :class:`InvSettings`.
    Services receive it via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: InvSettings) -> None:
        self._settings = settings
        self._repositories: dict[ItemKind, TypedRepository[Any]] = {}
        self._saved: dict[ItemKind, list[Any]] = {}

    @property
    def root(self) -> Path:
        """The warehouse root directory (where ``invctl.toml`` lives)."""
        return self._settings.data_root

    @property
    def data_dir(self) -> Path:
        """Directory holding one store file per item kind."""
        return self.root / self._settings.storage.directory

    @property
    def settings(self) -> InvSettings:
        return self._settings

    def store_path(self, kind: ItemKind) -> Path:
        return self.data_dir / f"{kind}.json"

    def repository(self, kind: ItemKind) -> TypedRepository[Any]:
        """The repository for *kind*, loaded from disk on first access.

        Raises:
            StorageError: If the store file exists but is unreadable.
        """
        repo = self._repositories.get(kind)
        if repo is None:
            path = self.store_path(kind)
            repo = self._build(kind, load_items(path, ITEM_MODELS[kind]), source=path)
            logger.debug("Loaded %d %s item(s) from %s", len(repo), kind, path)
        return repo

    def save(self, kind: ItemKind) -> Path:
        """Persist the repository for *kind*; returns the file written.

        A failed write rolls the repository back to the last saved state.

        Raises:
            StorageError: If the store file cannot be written.
        """
        repo = self.repository(kind)
        path = self.store_path(kind)
        items = repo.list_all()
        try:
            save_items(path, items, repo.item_type, indent=self._settings.storage.indent)
        except StorageError:
            self._build(kind, self._saved[kind], source=path)
            logger.warning("Rolled back unsaved %s changes after failed write to %s", kind, path)
            raise
        self._saved[kind] = items
        logger.debug("Saved %d %s item(s) to %s", len(repo), kind, path)
        return path

    def _build(self, kind: ItemKind, items: list[Any], *, source: Path) -> TypedRepository[Any]:
        repo: TypedRepository[Any] = TypedRepository(ITEM_MODELS[kind])
        for error in bulk_insert(repo, items):
            logger.warning("Skipping duplicate record in %s: %s", source, error.message)
        self._repositories[kind] = repo
        self._saved[kind] = repo.list_all()
        return repo
