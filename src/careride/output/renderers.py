"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Entitlement ops are prefixed with their kind (``subscription_status``,
``boost_purchase``); dispatch strips the prefix. Unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from careride.domain.models import format_date
from careride.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from careride.services.result import ServiceResult

Renderer = Callable[..., None]

_ENTITLEMENT_PREFIXES = ("subscription_", "boost_")


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(_dispatch_key(result.op), _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    items = d.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)

    if "status" in d:
        return str(d["status"])
    if result.op == "unread_count":
        return str(d.get("unread", 0))
    if "id" in d:
        return str(d["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _dispatch_key(op: str) -> str:
    for prefix in _ENTITLEMENT_PREFIXES:
        if op.startswith(prefix):
            return f"entitlement_{op[len(prefix):]}"
    return op


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "care.ok"), (f"  {result.op}", "care.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if key == "id" or key.endswith("_id"):
        style = "care.id"
    elif key == "status":
        style = style_for_status(str(value))
    elif key in ("price", "monthly_equivalent"):
        style = "care.price"
    else:
        style = ""
    console.print(Text.assemble((f"  {key}: ", "care.key"), (str(value), style)))


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
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _yes_no(value: Any) -> str:
    return "yes" if value else "no"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text.assemble(("ERROR", "care.error"), (f"  {result.op}{code}", "care.op"), f": {msg}")
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Doctor renderers ──────────────────────────────────────────────────


def _doctor_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="care.id", no_wrap=True)
    table.add_column("Name", style="care.name")
    table.add_column("Specialty")
    table.add_column("Location")
    table.add_column("Rating", justify="right")
    table.add_column("Today")
    table.add_column("")
    if verbose:
        table.add_column("Why")

    for item in items:
        sponsored = Text("Sponsored", style="care.sponsored") if item.get("boosted") else Text("")
        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("specialty", "")),
            str(item.get("location", "")),
            f"{item.get('rating', 0):.1f} ({item.get('review_count', 0)})",
            _yes_no(item.get("available_today")),
            sponsored,
        ]
        if verbose:
            row.append("; ".join(item.get("reasons", [])))
        table.add_row(*row)
    return table


def _render_doctor_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render search and by_specialty results as a ranked table."""
    d = result.data
    items = d.get("items", [])
    if not items:
        query = d.get("query")
        console.print(Text(f"No doctors found for '{query}'." if query else "No doctors found."))
        return
    console.print(_doctor_table(items, verbose=verbose))
    total = d.get("total", d.get("count", len(items)))
    shown = d.get("count", len(items))
    suffix = f" (showing {shown})" if shown != total else ""
    console.print(f"\n{total} doctors{suffix}")
    if verbose:
        _render_meta(console, result)


def _render_doctor(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_doctor and the profile ops as a profile panel."""
    d = result.data
    lines = [
        f"{d.get('specialty', '')}, {d.get('location', '')}",
        f"Rating: {d.get('rating', 0):.1f} ({d.get('review_count', 0)} reviews)",
        f"Experience: {d.get('years_of_experience', 0)} years",
        f"Languages: {', '.join(d.get('languages', []))}",
        f"Available today: {_yes_no(d.get('available_today'))}",
        f"Accepting new patients: {_yes_no(d.get('accepting_new_patients'))}",
    ]
    reasons = d.get("reasons", [])
    if reasons:
        lines.append("")
        lines.extend(f"* {reason}" for reason in reasons)
    bio = d.get("bio", "")
    if bio:
        lines.append("")
        lines.append(bio)

    title = f"{d.get('id', '?')}  {d.get('name', '')}"
    border = "care.sponsored" if d.get("boosted") else "dim"
    console.print(Panel(Text("\n".join(lines)), title=title, border_style=border, expand=False))
    if verbose:
        _render_meta(console, result)


def _render_specialties(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="care.id", no_wrap=True)
    table.add_column("Specialty", style="care.name")
    for item in result.data.get("items", []):
        table.add_row(str(item["id"]), str(item["name"]))
    console.print(table)


# ── Entitlement renderers ─────────────────────────────────────────────


def _render_plans(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    has_multiplier = any(item.get("boost_multiplier") for item in items)

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="care.id", no_wrap=True)
    table.add_column("Plan", style="care.name")
    table.add_column("Price", style="care.price", justify="right")
    table.add_column("Billing")
    if has_multiplier:
        table.add_column("Boost", justify="right")
    table.add_column("")

    for item in items:
        row = [
            str(item["id"]),
            str(item["name"]),
            str(item["price"]),
            str(item["billing"]),
        ]
        if has_multiplier:
            row.append(f"{item['boost_multiplier']}x" if item.get("boost_multiplier") else "")
        row.append("Most popular" if item.get("popular") else "")
        table.add_row(*row)
    console.print(table)

    if verbose:
        for item in items:
            console.print(f"\n[care.name]{item['name']}[/care.name]  {item['description']}")
            for feature in item.get("features", []):
                console.print(f"  * {feature}")


def _render_entitlement_state(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render status/purchase/cancel/reactivate/refresh results."""
    _status_line(console, result)
    for key in (
        "status",
        "can_access",
        "id",
        "plan_name",
        "days_remaining",
        "renews_on",
        "active_until",
        "expired_on",
    ):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_history(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No purchases yet.")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="care.id", no_wrap=True)
    table.add_column("Plan", style="care.name")
    table.add_column("Price", style="care.price", justify="right")
    table.add_column("Purchased")
    table.add_column("Expires")
    table.add_column("Status")
    for item in items:
        status = str(item.get("status", ""))
        table.add_row(
            str(item["id"]),
            str(item["plan_name"]),
            str(item["price"]),
            format_date(int(item["created_at"])),
            str(item["expires"]),
            Text(status, style=style_for_status(status)),
        )
    console.print(table)


def _render_analytics(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    state = "boost active" if d.get("boosted") else "no active boost"
    console.print(f"[care.name]{d.get('period', '')}[/care.name] ({state})")
    rows = (
        ("Profile views", d["profile_views"], d["profile_views_change_percent"]),
        ("Search appearances", d["search_appearances"], d["search_appearances_change_percent"]),
        ("Message requests", d["message_requests"], d["message_requests_change_percent"]),
    )
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")
    for label, value, change in rows:
        style = "green" if str(change).startswith("+") else "red"
        table.add_row(label, str(value), Text(str(change), style=style))
    position_change = d["position_change"]
    arrow = "up" if position_change < 0 else "down"
    table.add_row(
        "Average position",
        f"#{d['average_position']}",
        Text(f"{arrow} {abs(position_change)}", style="green" if arrow == "up" else "red"),
    )
    console.print(table)


# ── Messaging renderers ───────────────────────────────────────────────


def _render_conversations(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No conversations yet.")
        return
    doctor_view = result.data.get("reader") == "doctor"
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="care.id", no_wrap=True)
    table.add_column("Patient" if doctor_view else "Doctor", style="care.name")
    table.add_column("Last message")
    table.add_column("Unread", justify="right")
    table.add_column("Updated", style="dim")
    for item in items:
        unread = int(item.get("unread", 0))
        table.add_row(
            str(item["id"]),
            str(item["patient_name"] if doctor_view else item["doctor_id"]),
            Text(str(item.get("preview", ""))),
            Text(str(unread), style="bold" if unread else "dim"),
            format_date(int(item["updated_at"])),
        )
    console.print(table)


def _render_messages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(
        f"Conversation [care.id]{result.data.get('conversation_id')}[/care.id] "
        f"with [care.id]{result.data.get('doctor_id')}[/care.id]"
    )
    if not items:
        console.print("No messages yet.")
        return
    for item in items:
        sender = str(item.get("sender_type", ""))
        style = "cyan" if sender == "patient" else "green"
        console.print(
            f"\n[{style}]{sender}[/{style}] [dim]{format_date(int(item['timestamp']))}[/dim]"
        )
        console.print(Text(f"  {item['content']}"))


def _render_message_sent(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "conversation_id", "sender_type"):
        _field(console, key, result.data.get(key, ""))
    if verbose:
        _field(console, "content", result.data.get("content", ""))
        _render_meta(console, result)


def _render_quick_replies(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="care.id", no_wrap=True)
    table.add_column("Category")
    table.add_column("Label", style="care.name")
    if verbose:
        table.add_column("Message")
    for item in result.data.get("items", []):
        row = [str(item["id"]), str(item["category"]), str(item["label"])]
        if verbose:
            row.append(str(item["message"]))
        table.add_row(*row)
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    # Doctors
    "search": _render_doctor_list,
    "by_specialty": _render_doctor_list,
    "get_doctor": _render_doctor,
    "specialties": _render_specialties,
    # Doctor profile
    "profile": _render_doctor,
    "profile_availability": _render_doctor,
    "profile_accepting": _render_doctor,
    "profile_languages": _render_doctor,
    "profile_update": _render_doctor,
    # Subscriptions and boosts
    "entitlement_plans": _render_plans,
    "entitlement_status": _render_entitlement_state,
    "entitlement_purchase": _render_entitlement_state,
    "entitlement_cancel": _render_entitlement_state,
    "entitlement_reactivate": _render_entitlement_state,
    "entitlement_refresh": _render_entitlement_state,
    "entitlement_history": _render_history,
    "entitlement_analytics": _render_analytics,
    # Messaging
    "conversations": _render_conversations,
    "messages": _render_messages,
    "send_message": _render_message_sent,
    "quick_replies": _render_quick_replies,
}
