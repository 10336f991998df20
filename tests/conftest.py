import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so `import realm_testgen` works without install
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from realm_testgen.builders.topology import TopologyBuilder  # noqa: E402


@pytest.fixture
def echo_builder():
    b = TopologyBuilder.create("echo_server")
    b.add_component("echo_server", "fuchsia-pkg://fuchsia.com/echo#meta/echo_server.cm")
    return b
