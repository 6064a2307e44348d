# Minimal CLI using argparse that loads data files, applies edits and prints or saves them.
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from linked_registry.components.bitstatus import MaskOp
from linked_registry.core.config import RegistryConfig, load_config
from linked_registry.core.errors import RegistryError
from linked_registry.core.registry import Registry
from linked_registry.galactic import GalaxyHistory
from linked_registry.persistence import (
    load_assets,
    load_galactic_history,
    load_users,
    save_assets,
    save_galactic_history,
    save_users,
)
from linked_registry.render import render_assets, render_history, render_users

logger = logging.getLogger(__name__)


def _int_mask(text: str) -> int:
    # accepts 8, 0x8, 0b1000
    return int(text, 0)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="linked-registry", description="Inspect and edit asset/user registries and galactic war histories"
    )
    p.add_argument("--config", type=Path, help="TOML config file (optional)")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    assets = sub.add_parser("assets", help="Load assets and optionally users")
    assets.add_argument("assets", type=Path, help="Asset file")
    assets.add_argument("--users", type=Path, help="User file (loaded after assets)")
    assets.add_argument(
        "--delete", action="append", default=[], metavar="HASH", help="Delete an asset and every reference to it"
    )
    assets.add_argument("--save-assets", type=Path, help="Write assets to this file")
    assets.add_argument("--save-users", type=Path, help="Write users to this file")

    galaxy = sub.add_parser("galaxy", help="Load a galactic war history")
    galaxy.add_argument("history", type=Path, help="History file")
    galaxy.add_argument("--count-mask", type=_int_mask, help="Count fleets with any of these status bits")
    galaxy.add_argument("--modify", metavar="BATTLE", help="Battle whose fleet statuses to modify")
    galaxy.add_argument("--op", choices=[op.value for op in MaskOp], default=MaskOp.SET.value)
    galaxy.add_argument("--mask", type=_int_mask, default=0, help="Status bits for --modify")
    galaxy.add_argument("--save", type=Path, help="Write the history to this file")
    return p


def run_assets(args: argparse.Namespace, config: RegistryConfig) -> int:
    registry = Registry(config=config)
    load_assets(registry, args.assets)
    if args.users:
        load_users(registry, args.users)

    for asset_hash in args.delete:
        registry.delete_record(asset_hash)
        print(f"Deleted asset {asset_hash}")

    print(render_assets(registry))
    if args.users:
        print()
        print(render_users(registry))

    if args.save_assets:
        save_assets(registry, args.save_assets)
        print(f"Wrote assets to {args.save_assets}")
    if args.save_users:
        save_users(registry, args.save_users)
        print(f"Wrote users to {args.save_users}")
    return 0


def run_galaxy(args: argparse.Namespace, config: RegistryConfig) -> int:
    history = GalaxyHistory(config)
    load_galactic_history(history, args.history)
    print(render_history(history))

    if args.count_mask is not None:
        count = history.count_fleets_with_status_bits(args.count_mask)
        print(f"Fleets with status bits {args.count_mask:#x}: {count}")
    if args.modify:
        modified = history.modify_fleet_statuses_in_battle(args.modify, MaskOp(args.op), args.mask)
        print(f"Modified fleet statuses: {modified}")

    if args.save:
        save_galactic_history(history, args.save)
        print(f"Wrote history to {args.save}")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else RegistryConfig()
        if args.command == "assets":
            return run_assets(args, config)
        return run_galaxy(args, config)
    except RegistryError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
