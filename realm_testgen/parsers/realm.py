"""Realm description loader.

Reads a YAML realm description, validates it against `realm.schema.json`
(draft-07) and replays it into a TopologyBuilder. The replay order is fixed:
imports, components, mock implementations, protocols, directories, storage,
test cases.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from jsonschema import Draft7Validator

from ..builders.topology import TopologyBuilder
from ..constants import DEFAULT_IMPORTS
from ..types import InvalidTopologyError

try:
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "realm.schema.json"

DIRECTORY_IMPORT = "fidl_fuchsia_io as fio"
MOCK_IMPORTS = (
    "fuchsia_component::server::ServiceFs",
    "futures::StreamExt",
)

_SCHEMA: Dict[str, Any] = {}


def load_realm_schema() -> Dict[str, Any]:
    global _SCHEMA
    if not _SCHEMA:
        with _SCHEMA_PATH.open("r", encoding="utf-8") as f:
            _SCHEMA = json.load(f)
    return _SCHEMA


def load_realm_yaml(path: str | Path) -> Dict[str, Any]:
    """Load a realm description file into a dict."""
    if yaml is None:
        raise RuntimeError("PyYAML is required to load realm descriptions")
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            doc = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"failed to parse yaml: {exc}") from exc
    if not isinstance(doc, dict):
        raise ValueError("Realm description must be a mapping at the document root")
    return doc


def validate_realm_doc(doc: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Validate a realm description against the JSON schema.

    Returns: (ok, errors)
    """
    v = Draft7Validator(load_realm_schema())
    errors = sorted(v.iter_errors(doc), key=lambda e: list(e.path))
    if not errors:
        return True, []

    msgs: List[str] = []
    for e in errors:
        loc = ".".join([str(p) for p in e.path])
        if loc:
            msgs.append(f"{loc}: {e.message}")
        else:
            msgs.append(e.message)
    return False, msgs


def build_from_doc(doc: Dict[str, Any]) -> TopologyBuilder:
    ok, errors = validate_realm_doc(doc)
    if not ok:
        raise InvalidTopologyError("invalid realm description: " + "; ".join(errors), errors)

    builder = TopologyBuilder.create(doc["component_under_test"])

    if doc.get("default_imports", True):
        for symbol in DEFAULT_IMPORTS:
            builder.add_import(symbol)
        if doc.get("directories"):
            builder.add_import(DIRECTORY_IMPORT)
        if doc.get("mocks"):
            for symbol in MOCK_IMPORTS:
                builder.add_import(symbol)
    for symbol in doc.get("imports") or []:
        builder.add_import(symbol)

    for comp in doc.get("components") or []:
        builder.add_component(comp["name"], comp.get("url"), bool(comp.get("mock", False)))

    for mock in doc.get("mocks") or []:
        builder.add_mock_impl(mock["component"], mock.get("protocol", ""))

    for proto in doc.get("protocols") or []:
        builder.add_protocol(proto["name"], proto["source"], proto["targets"])

    for d in doc.get("directories") or []:
        builder.add_directory(d["name"], d["path"], d["targets"])

    for s in doc.get("storage") or []:
        builder.add_storage(s["name"], s["path"], s["targets"])

    for protocol in doc.get("test_cases") or []:
        builder.add_test_case(protocol)

    logger.debug(
        "loaded realm for %s with %d components",
        builder.component_under_test,
        len(builder.components),
    )
    return builder


def load_realm(path: str | Path) -> TopologyBuilder:
    return build_from_doc(load_realm_yaml(path))
