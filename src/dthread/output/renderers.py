"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from dthread.output.console import create_console, get_output, style_for_relationship

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from dthread.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
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
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list) and items:
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))
    if "ids" in result.data:
        return "\n".join(result.data["ids"])
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="dt.ok"), Text(f"  {result.op}", style="dt.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dt.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="dt.id")
    elif key == "title":
        v = Text(str(value), style="dt.title")
    elif key == "domain":
        v = Text(str(value), style="dt.domain")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="dt.error"),
        Text(f"  {result.op}", style="dt.op"),
        Text(code, style="dim"),
        Text(f"  {msg}"),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Item renderers ────────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create_item / nest_item results."""
    _status_line(console, result)
    for key in ("id", "domain", "title", "parent_id", "child_id", "attributes"):
        value = result.data.get(key)
        if value:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_items as a table with nested children indented."""
    items: list[dict[str, Any]] = result.data.get("items", [])
    by_id = {item["id"]: item for item in items}
    child_ids = {c for item in items for c in item.get("child_ids", [])}

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="dt.id", no_wrap=True)
    table.add_column("Title", style="dt.title")
    table.add_column("Links")
    if verbose:
        table.add_column("Attributes", style="dim")

    def add(item: dict[str, Any], depth: int, seen: set[str]) -> None:
        seen.add(item["id"])
        links = ", ".join(
            f"{domain}:{tid}"
            for domain, ids in item.get("cross_domain_target_ids", {}).items()
            for tid in ids
        )
        row = ["  " * depth + item["id"], item.get("title", ""), links]
        if verbose:
            row.append(json.dumps(item.get("attributes", {}), separators=(",", ":")))
        table.add_row(*row)
        for cid in item.get("child_ids", []):
            if cid in by_id and cid not in seen:
                add(by_id[cid], depth + 1, seen)

    seen: set[str] = set()
    for item in items:
        if item["id"] not in child_ids:
            add(item, 0, seen)

    console.print(Text(str(result.data.get("domain", "")), style="dt.domain"))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} items")


def _render_bulk(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "domain", d.get("domain"))
    _field(console, "generated_count", d.get("generated_count"))
    _field(console, "children_count", d.get("children_count"))
    if verbose:
        _field(console, "ids", ", ".join(d.get("ids", [])))
        _render_meta(console, result)


# ── Config renderer ───────────────────────────────────────────────────


def _render_config(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "allow_only_adjacent_connections", d.get("allow_only_adjacent_connections"))
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Domain", style="dt.domain")
    for index, domain in enumerate(d.get("domain_order", []), start=1):
        table.add_row(str(index), domain)
    console.print(table)
    if verbose:
        _field(console, "updated", d.get("updated"))
        _render_meta(console, result)


# ── Relationship renderer ─────────────────────────────────────────────


def _render_relationship(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = result.data
    console.print(
        Text(f"  {d.get('from_domain')}:{d.get('from')}", style="dt.id"),
        Text(
            f" -[{d.get('relationship_type')}]-> ",
            style=style_for_relationship(str(d.get("relationship_type"))),
        ),
        Text(f"{d.get('to_domain')}:{d.get('to')}", style="dt.id"),
        sep="",
    )
    _field(console, "message", d.get("message"))
    if verbose:
        _render_meta(console, result)


# ── Layout renderer ───────────────────────────────────────────────────


def _render_layout(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Domain", style="dt.domain")
    table.add_column("X", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Items", justify="right")
    table.add_column("Edges out", justify="right", style="dt.rel")
    for row in d.get("summary", []):
        table.add_row(
            str(row["domain"]),
            str(row["x"]),
            str(row["height"]),
            str(row["items"]),
            str(row["edges_out"]),
        )
    console.print(table)
    console.print(f"\n{len(d.get('nodes', []))} nodes, {len(d.get('edges', []))} edges")

    if verbose:
        console.print()
        for node in d.get("nodes", []):
            if node["kind"] != "item":
                continue
            pos, size = node["position"], node["size"]
            label = " / ".join(node.get("payload", {}).get("label", []))
            console.print(
                f"  {node['id']}  ({pos['x']},{pos['y']}) {size['w']}x{size['h']}  {label}"
            )
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "create_item": _render_mutation,
    "nest_item": _render_mutation,
    "bulk_generate": _render_bulk,
    "list_items": _render_item_table,
    "get_config": _render_config,
    "update_config": _render_config,
    "move_domain": _render_config,
    "create_relationship": _render_relationship,
    "compute_layout": _render_layout,
}
