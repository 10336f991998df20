import pytest

from realm_testgen.utils.naming import const_name, mock_function_name, protocol_marker, rust_ident
from realm_testgen.utils.output import write_text_atomic
from realm_testgen.utils.templates import load_template, substitute


def test_rust_ident_replaces_invalid_characters():
    assert rust_ident("echo_server") == "echo_server"
    assert rust_ident("under-test") == "under_test"
    assert rust_ident("2fast") == "_2fast"


def test_const_and_mock_names():
    assert const_name("dep") == "DEP_URL"
    assert const_name("my-dep.v2") == "MY_DEP_V2_URL"
    assert mock_function_name("fake-dep") == "fake_dep_impl"


def test_protocol_marker_without_library():
    assert protocol_marker("Echo") == ("EchoMarker", "echomarker")


def test_protocol_marker_with_library():
    assert protocol_marker("fuchsia.net.name.Lookup") == ("fidl_fuchsia_net_name::LookupMarker", "fuchsia_net_name_lookupmarker")


def test_substitute_applies_replacements_in_order():
    out = substitute("MARKER_VAR_NAME MARKER", [("MARKER_VAR_NAME", "v"), ("MARKER", "T")])
    assert out == "v T"


def test_unknown_template_raises():
    with pytest.raises(FileNotFoundError):
        load_template("template_cobol_test_function")


def test_write_text_atomic_replaces_existing_file(tmp_path):
    p = tmp_path / "out.rs"
    p.write_text("old", encoding="utf-8")
    write_text_atomic(str(p), "new\n")

    assert p.read_text(encoding="utf-8") == "new\n"
    assert not (tmp_path / "out.rs.tmp").exists()


def test_substitute_does_not_rescan_inserted_values():
    out = substitute("MARKER PROTOCOL", [("MARKER", "PROTOCOLMarker"), ("PROTOCOL", "p.Svc")])
    assert out == "PROTOCOLMarker p.Svc"


def test_protocol_marker_variable_keeps_library_path():
    assert protocol_marker("fuchsia.a.Echo")[1] != protocol_marker("fuchsia.b.Echo")[1]
