"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from invctl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from invctl.services.result import ServiceResult

# Fields every item has; anything else in a dumped item is variant-specific.
_CORE_FIELDS = ("id", "name", "quantity")
_HIDDEN_FIELDS = frozenset({"kind", *_CORE_FIELDS})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        err = result.error
        code = err.code if err else "ERROR"
        msg = err.message if err else "Unknown error"
        return f"ERROR: {result.op} [{code}]: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="inv.ok")
    op = Text(f"  {result.op}", style="inv.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    style = {"id": "inv.id", "name": "inv.name"}.get(key, "")
    console.print(Text.assemble((f"  {key}: ", "inv.key"), (str(value), style)))


def _variant_columns(items: list[dict[str, Any]]) -> list[str]:
    columns: list[str] = []
    for item in items:
        for key in item:
            if key not in _HIDDEN_FIELDS and key not in columns:
                columns.append(key)
    return columns


def _title(key: str) -> str:
    return key.replace("_", " ").title()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    code = err.code if err else "ERROR"
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="inv.error"),
        Text(f"  {result.op}", style="inv.op"),
        Text(f"[{code}]:", style="inv.error"),
        Text(msg),
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Item renderers ────────────────────────────────────────────────────


def _render_item_mutation(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render add/remove/set-quantity/increase-stock results."""
    _status_line(console, result)
    item = result.data.get("item", {})
    for key in _CORE_FIELDS:
        if key in item:
            _field(console, key, item[key])
    if "previous_quantity" in result.data:
        _field(console, "previous_quantity", result.data["previous_quantity"])
        _field(console, "delta", result.data["delta"])
    if verbose:
        _render_meta(console, result)


def _render_single_item(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_item as a panel listing every field."""
    item = result.data.get("item", {})
    kind = str(result.data.get("kind", ""))
    lines = [f"quantity: {item.get('quantity', '?')}"]
    lines.extend(f"{_title(key).lower()}: {item[key]}" for key in _variant_columns([item]))
    title = Text(f"{item.get('id', '?')} · {item.get('name', 'Unnamed')}")
    border = style_for_kind(kind) or "dim"
    console.print(Panel(Text("\n".join(lines)), title=title, border_style=border, expand=False))


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_items as a table with variant-specific columns."""
    items: list[dict[str, Any]] = result.data.get("items", [])
    low_stock = set(result.data.get("low_stock", []))
    extra = _variant_columns(items)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="inv.id", no_wrap=True)
    table.add_column("Name", style="inv.name")
    table.add_column("Qty", justify="right")
    for col in extra:
        table.add_column(_title(col))

    for item in items:
        qty_style = "inv.low" if item.get("id") in low_stock else ""
        row: list[Any] = [
            Text(str(item.get("id", ""))),
            Text(str(item.get("name", ""))),
            Text(str(item.get("quantity", "")), style=qty_style),
        ]
        row.extend(Text(str(item.get(col, ""))) for col in extra)
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} {result.data.get('kind', '')} items")


def _render_import(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "imported", result.data.get("imported", 0))
    skipped = result.data.get("skipped", [])
    if skipped:
        _field(console, "skipped", ", ".join(str(s) for s in skipped))


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    _field(console, "path", result.data.get("path", ""))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "add_item": _render_item_mutation,
    "remove_item": _render_item_mutation,
    "set_quantity": _render_item_mutation,
    "increase_stock": _render_item_mutation,
    "get_item": _render_single_item,
    "list_items": _render_item_table,
    "import_items": _render_import,
    "export_items": _render_export,
}
