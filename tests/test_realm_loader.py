import textwrap

import pytest

from realm_testgen.emitter import TextEmitter
from realm_testgen.parsers.realm import build_from_doc, load_realm, load_realm_yaml, validate_realm_doc
from realm_testgen.types import InvalidTopologyError


REALM_YAML = textwrap.dedent(
    """
    component_under_test: echo_server
    components:
      - name: echo_server
        url: fuchsia-pkg://fuchsia.com/echo#meta/echo_server.cm
      - name: fake_logger
        mock: true
    mocks:
      - component: fake_logger
        protocol: fuchsia.logger.LogSink
    protocols:
      - name: fuchsia.logger.LogSink
        source: fake_logger
        targets: [self]
      - name: fuchsia.example.Echo
        source: self
        targets: [root]
    directories:
      - name: config-data
        path: /config/data
        targets: [self]
    storage:
      - name: data
        path: /data
        targets: [self]
    test_cases:
      - fuchsia.example.Echo
    """
)


def _write(tmp_path, text):
    p = tmp_path / "realm.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_load_realm_replays_description_in_order(tmp_path):
    b = load_realm(_write(tmp_path, REALM_YAML))

    assert b.component_under_test == "echo_server"
    assert [c.name for c in b.components] == ["echo_server", "fake_logger"]
    assert [r.kind for r in b.routes] == ["component", "component", "protocol", "protocol", "directory", "storage"]
    assert [m.function_name for m in b.mocks] == ["fake_logger_impl"]
    assert [t.protocol for t in b.test_cases] == ["fuchsia.example.Echo"]


def test_load_realm_adds_default_and_feature_imports(tmp_path):
    b = load_realm(_write(tmp_path, REALM_YAML))

    assert "use anyhow::Error;" in b.imports
    assert "use fidl_fuchsia_io as fio;" in b.imports
    assert "use futures::StreamExt;" in b.imports
    assert b.imports == sorted(b.imports)


def test_default_imports_can_be_disabled():
    b = build_from_doc({"component_under_test": "x", "default_imports": False, "imports": ["a::B"]})
    assert b.imports == ["use a::B;"]


def test_loaded_realm_renders_strictly(tmp_path):
    text = TextEmitter(load_realm(_write(tmp_path, REALM_YAML)), strict=True).render()

    assert text.startswith("use anyhow::Error;\n")
    assert "async fn fake_logger_impl(handles: LocalComponentHandles)" in text
    assert "async fn test_fuchsia_example_echomarker()" in text


def test_schema_errors_are_reported_with_location():
    ok, errors = validate_realm_doc({"component_under_test": "x", "protocols": [{"name": "p", "source": "root"}]})
    assert not ok
    assert any(e.startswith("protocols.0:") and "targets" in e for e in errors)


def test_build_from_invalid_doc_raises():
    with pytest.raises(InvalidTopologyError) as ei:
        build_from_doc({"components": []})
    assert any("component_under_test" in e for e in ei.value.errors)


def test_non_mock_component_without_url_fails_at_build():
    doc = {"component_under_test": "x", "components": [{"name": "dep"}]}
    with pytest.raises(InvalidTopologyError):
        build_from_doc(doc)


def test_non_mapping_document_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        load_realm_yaml(_write(tmp_path, "- just\n- a list\n"))


def test_malformed_yaml_is_reported_as_value_error(tmp_path):
    with pytest.raises(ValueError, match="failed to parse yaml"):
        load_realm_yaml(_write(tmp_path, "component_under_test: [unclosed\n"))
