"""JSON storage for repository contents.

File shape::

    {
      "kind": "electronic",
      "items": [{"kind": "electronic", "id": 1, "name": "Laptop", ...}]
    }

The storage layer only reads and writes records. Loading into a
repository goes through repeated ``insert`` (see :mod:`warehouse`), so
duplicate ids in a file surface as DUPLICATE_KEY rather than silently
overwriting one another.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from invctl.domain.items import kind_of

M = TypeVar("M", bound=BaseModel)


class StorageError(Exception):
    """A store file cannot be read as the expected item kind, or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Store file {path}: {reason}")
        self.path = path
        self.reason = reason


def dump_items(items: Iterable[BaseModel], item_type: type[BaseModel], *, indent: int = 2) -> str:
    """Serialize *items* to the store's JSON document."""
    document: dict[str, Any] = {
        "kind": str(kind_of(item_type)),
        "items": [item.model_dump(mode="json") for item in items],
    }
    return json.dumps(document, indent=indent) + "\n"


def parse_items(raw: str, item_type: type[M], *, source: Path) -> list[M]:
    """Parse a store document into validated *item_type* models.

    Raises:
        StorageError: On malformed JSON, a kind mismatch, or records
            that fail model validation.
    """
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError(source, f"invalid JSON ({exc.msg})") from exc

    if not isinstance(document, dict) or "items" not in document:
        raise StorageError(source, "expected an object with an 'items' list")

    expected = str(kind_of(item_type))
    found = document.get("kind", expected)
    if found != expected:
        raise StorageError(source, f"holds {found!r} items, expected {expected!r}")

    try:
        return TypeAdapter(list[item_type]).validate_python(document["items"])  # type: ignore[valid-type]
    except ValidationError as exc:
        raise StorageError(source, f"{exc.error_count()} invalid record(s)") from exc


def save_items(
    path: Path,
    items: Iterable[BaseModel],
    item_type: type[BaseModel],
    *,
    indent: int = 2,
) -> None:
    """Write *items* to *path*, creating parent directories as needed.

    Raises:
        StorageError: If the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_items(items, item_type, indent=indent), encoding="utf-8")
    except OSError as exc:
        raise StorageError(path, exc.strerror or str(exc)) from exc


def load_items(path: Path, item_type: type[M]) -> list[M]:
    """Read items from *path*. A missing file loads as an empty list."""
    if not path.is_file():
        return []
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise StorageError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise StorageError(path, exc.strerror or str(exc)) from exc
    return parse_items(raw, item_type, source=path)
