"""Topology builders.

`TopologyBuilder` is the only realization of the builder contract; it is
re-exported here for convenience.
"""

from .topology import TopologyBuilder  # noqa: F401

__all__ = ["TopologyBuilder"]
