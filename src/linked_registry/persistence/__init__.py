"""Text file loaders and savers."""

from .asset_files import load_assets, load_users, save_assets, save_users
from .galactic_files import load_galactic_history, save_galactic_history

__all__ = [
    "load_assets",
    "save_assets",
    "load_users",
    "save_users",
    "load_galactic_history",
    "save_galactic_history",
]
