"""Opt-in consistency checks over a populated topology builder."""

from .topology import validate_topology  # noqa: F401

__all__ = ["validate_topology"]
