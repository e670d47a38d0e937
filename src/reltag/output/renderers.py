"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from reltag.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from reltag.services.result import ServiceResult

    Renderer = Callable[..., None]


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
    """Minimal output: the tag alone, or one canonical tag per valid input."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    tag = result.data.get("tag")
    if tag:
        return str(tag)

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(i["canonical"]) for i in items if i.get("canonical"))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="rel.ok"), Text(f"  {result.op}", style="rel.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="rel.key")
    if key == "tag":
        v = Text(str(value), style="rel.tag")
    elif key == "sha":
        v = Text(str(value), style="rel.sha")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_warnings_count(console: Console, result: ServiceResult) -> None:
    invalid = result.data.get("invalid") or []
    if invalid:
        _field(console, "invalid_tags", len(invalid))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rel.error")
    op = Text(f"  {result.op}", style="rel.op")
    console.print(label, op, Text(" — "), Text(msg))

    if err and verbose:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Tag renderers ─────────────────────────────────────────────────────


def _render_tag(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render next_tag / create_tag results."""
    d = result.data
    _status_line(console, result)
    _field(console, "tag", d["tag"])
    _field(console, "latest", d.get("latest") or "(none, first tag of this line)")
    for key in ("sha", "ref", "backend"):
        if key in d:
            _field(console, key, d[key])
    _render_warnings_count(console, result)

    if verbose:
        _field(console, "relevant", ", ".join(d.get("relevant") or []) or "-")
        for item in d.get("invalid") or []:
            console.print(
                Text("  invalid", style="rel.invalid"),
                Text(f" {item['name']}: {item.get('detail', '')}"),
                sep="",
            )


def _render_parse(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render parse_tags as a table of classified texts."""
    d = result.data
    _status_line(console, result)
    _field(console, "valid", f"{d['valid_count']}/{d['count']}")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Tag", no_wrap=True)
    table.add_column("Status")
    table.add_column("Year", justify="right")
    table.add_column("Update")
    table.add_column("Counter", justify="right")
    if verbose:
        table.add_column("Detail", style="dim")

    for item in d["items"]:
        if item["valid"]:
            row = [
                Text(item["text"]),
                Text("valid", style="rel.valid"),
                str(item["year"]),
                str(item["update"]),
                str(item["counter"]),
            ]
        else:
            row = [Text(item["text"]), Text(item["reason"], style="rel.invalid"), "", "", ""]
        if verbose:
            row.append(Text(item.get("detail") or ""))
        table.add_row(*row)

    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "next_tag": _render_tag,
    "create_tag": _render_tag,
    "parse_tags": _render_parse,
}
