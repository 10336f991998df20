"""Small, shared constants used across realm_testgen.

Keep this module dependency-free to avoid import cycles.
"""

ROOT_REF: str = "root"
SELF_REF: str = "self"

COMPONENT_URL_SUFFIX: str = "_URL"
MOCK_FUNCTION_SUFFIX: str = "_impl"
MARKER_SUFFIX: str = "Marker"
FIDL_CRATE_PREFIX: str = "fidl_"

# Column of the `.to(...)` clauses inside a rendered route.
TARGET_INDENT: int = 16

DIRECTORY_RIGHTS: str = "fio::RW_STAR_DIR"

REALM_PROLOGUE: str = (
    "pub async fn create_realm() -> Result<RealmInstance, Error> {\n"
    "    let builder = RealmBuilder::new().await?;"
)
REALM_EPILOGUE: str = (
    "    let instance = builder.build().await?;\n"
    "    Ok(instance)\n"
    "}"
)

MOCK_TEMPLATE_NAME: str = "template_rust_mock_function"
TEST_TEMPLATE_NAME: str = "template_rust_test_function"

# Imports every generated harness needs regardless of topology.
DEFAULT_IMPORTS: tuple = (
    "anyhow::Error",
    "fuchsia_component_test::{Capability, ChildOptions, LocalComponentHandles, RealmBuilder, RealmInstance, Ref, Route}",
)
