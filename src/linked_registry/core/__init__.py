"""Linked registry core package."""

from .registry import Registry

__all__ = ["Registry"]
