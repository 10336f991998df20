"""realm_testgen: compile a component realm topology into an integration-test harness.

Typical use::

    b = TopologyBuilder.create("echo_server")
    b.add_component("echo_server", "fuchsia-pkg://fuchsia.com/echo#meta/echo_server.cm")
    b.add_protocol("fuchsia.example.Echo", "root", ["self"]).add_test_case("fuchsia.example.Echo")
    text = TextEmitter(b).render()
"""

from .builders.topology import TopologyBuilder  # noqa: F401
from .emitter import TextEmitter, emit  # noqa: F401
from .types import ConsumedBuilderError, InvalidTopologyError  # noqa: F401

__all__ = [
    "TopologyBuilder",
    "TextEmitter",
    "emit",
    "ConsumedBuilderError",
    "InvalidTopologyError",
]

__version__ = "0.1.0"
