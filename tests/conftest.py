"""Shared pytest fixtures and test helpers for invctl tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from invctl.config.settings import InvSettings
from invctl.domain.items import ElectronicItem, GroceryItem
from invctl.infrastructure.warehouse import Warehouse


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer INVCTL_* variables out of every test."""
    for name in ("INVCTL_CONFIG", "INVCTL_DATA_ROOT", "INVCTL_STORAGE__DIRECTORY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_handlers() -> Iterator[None]:
    """CLI invocations reconfigure logging; undo that after every test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    yield
    root.handlers = handlers


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary warehouse root with an empty config file."""
    (tmp_path / "invctl.toml").write_text("", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(data_root: Path) -> InvSettings:
    return InvSettings.from_cli(data_root=data_root)


@pytest.fixture
def warehouse(settings: InvSettings) -> Warehouse:
    """Warehouse over an empty data directory."""
    return Warehouse(settings)


@pytest.fixture
def _isolated_warehouse(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Change CWD to a temp warehouse root so the CLI finds its invctl.toml.

    Use via ``@pytest.mark.usefixtures("_isolated_warehouse")`` on command
    test classes.
    """
    monkeypatch.chdir(data_root)
    yield


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_electronic(
    item_id: int = 1,
    name: str = "Laptop",
    quantity: int = 10,
    **kw: Any,
) -> ElectronicItem:
    fields: dict[str, Any] = {"brand": "Dell", "warranty_months": 24, **kw}
    return ElectronicItem(id=item_id, name=name, quantity=quantity, **fields)


def make_grocery(
    item_id: int = 101,
    name: str = "Milk",
    quantity: int = 50,
    expiry_date: date | None = None,
) -> GroceryItem:
    return GroceryItem(
        id=item_id,
        name=name,
        quantity=quantity,
        expiry_date=expiry_date or date(2099, 1, 1),
    )
