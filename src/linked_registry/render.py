"""Plain-text views of a registry and a galaxy history, for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .components.bitstatus import AssetFlag, decode, status_text

if TYPE_CHECKING:
    from .core.registry import Registry
    from .galactic import GalaxyHistory


def _flag_names(value: int) -> str:
    names = sorted(decode(AssetFlag, value), key=lambda name: AssetFlag[name].value)
    return ",".join(names) if names else "-"


def render_assets(registry: Registry) -> str:
    if not len(registry.records):
        return "(no assets)"
    rows = [f"{'HASH':<40} {'SIZE':>12}  FLAGS"]
    for record in registry.records:
        rows.append(f"{record.key:<40} {record.size:>12}  {_flag_names(record.flags)}")
    return "\n".join(rows)


def render_users(registry: Registry) -> str:
    if not len(registry.owners):
        return "(no users)"
    rows = []
    for owner in registry.owners:
        rows.append(f"{owner.key} (id {owner.id}), {len(owner.references)} asset(s)")
        for target in owner.references.targets():
            rows.append(f"  - {target}")
    return "\n".join(rows)


def render_history(history: GalaxyHistory) -> str:
    if not history.total_battles:
        return "(no battles)"
    rows = []
    for battle in history.battles():
        rows.append(f"{battle.key.name} [{battle.key.date}]")
        for fleet in history.fleets_in(battle):
            status = status_text(fleet.flags) or "no status"
            rows.append(f"  {fleet.key.name}: {fleet.size} ships, {status}")
    return "\n".join(rows)
