from __future__ import annotations
import re
from typing import Tuple

from ..constants import (
    COMPONENT_URL_SUFFIX,
    FIDL_CRATE_PREFIX,
    MARKER_SUFFIX,
    MOCK_FUNCTION_SUFFIX,
)

_NON_IDENT_RE = re.compile(r"[^A-Za-z0-9_]")


def rust_ident(name: str) -> str:
    """Map a component name onto a Rust identifier (`under-test` -> `under_test`)."""
    ident = _NON_IDENT_RE.sub("_", str(name))
    if not ident or ident[0].isdigit():
        ident = "_" + ident
    return ident


def const_name(name: str) -> str:
    return rust_ident(name).upper() + COMPONENT_URL_SUFFIX


def mock_function_name(component_name: str) -> str:
    # Single source for the mock entry point; routes and skeletons both use it.
    return f"{rust_ident(component_name)}{MOCK_FUNCTION_SUFFIX}"


def protocol_marker(protocol: str) -> Tuple[str, str]:
    """Return (marker type path, marker variable name) for a protocol.

    `fuchsia.example.Echo` -> (`fidl_fuchsia_example::EchoMarker`, `fuchsia_example_echomarker`).
    The variable name keeps the library path so protocols sharing a last
    segment still get distinct test functions. A protocol without a library
    path keeps its bare name.
    """
    raw = str(protocol).strip()
    library, _, last = raw.rpartition(".")
    marker_type = f"{rust_ident(last)}{MARKER_SUFFIX}"
    marker_var = f"{rust_ident(raw)}{MARKER_SUFFIX}".lower()
    if library:
        crate = FIDL_CRATE_PREFIX + rust_ident(library).lower()
        marker_type = f"{crate}::{marker_type}"
    return marker_type, marker_var


def rust_str(value: str) -> str:
    """Escape a value for use inside a double-quoted Rust string literal."""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')
