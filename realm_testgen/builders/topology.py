"""Incremental realm topology IR.

A `TopologyBuilder` accumulates the facts of one test realm (imports,
components, capability routes, mock skeletons and test cases) through a
fixed set of chained mutations. Every fact is pre-rendered to the text it
contributes to the harness; `realm_testgen.emitter` only stitches sections
together.

Cross references (route targets, duplicate names) are not checked here; see
`realm_testgen.validation.topology` for the opt-in checks.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..constants import (
    DIRECTORY_RIGHTS,
    MOCK_TEMPLATE_NAME,
    ROOT_REF,
    SELF_REF,
    TARGET_INDENT,
    TEST_TEMPLATE_NAME,
)
from ..types import (
    ComponentRef,
    ConstantDecl,
    ConsumedBuilderError,
    InvalidTopologyError,
    MockSkeleton,
    RealmSummary,
    RouteSnippet,
    TestCaseSnippet,
)
from ..utils.naming import const_name, mock_function_name, protocol_marker, rust_ident, rust_str
from ..utils.templates import load_template, substitute

logger = logging.getLogger(__name__)


_LOCAL_CHILD = """    let {var} = builder.add_local_child(
        "{name}",
        move |handles: LocalComponentHandles| Box::pin({function}(handles)),
        ChildOptions::new()
    )
    .await?;"""

_CHILD = """    let {var} = builder.add_child(
        "{name}",
        {url},
        ChildOptions::new()
    )
    .await?;"""

_ROUTE = """    builder
        .add_route(
            Route::new()
                .capability({capability})
                .from({source})
{targets},
        )
        .await?;"""


class TopologyBuilder:
    """Mutable IR for one generated harness file.

    All mutators return the builder so calls can be chained. Once an emitter
    consumes the builder it is frozen; further mutation raises
    `ConsumedBuilderError`.
    """

    def __init__(self, component_under_test: str):
        self._component_under_test = str(component_under_test)
        self._imports: set[str] = set()
        self._components: List[ComponentRef] = []
        self._components_by_name: Dict[str, ComponentRef] = {}
        self._constants: List[ConstantDecl] = []
        self._routes: List[RouteSnippet] = []
        self._mocks: List[MockSkeleton] = []
        self._test_cases: List[TestCaseSnippet] = []
        self._consumed = False

    @classmethod
    def create(cls, component_under_test: str) -> "TopologyBuilder":
        return cls(component_under_test)

    # -- read side -------------------------------------------------------

    @property
    def component_under_test(self) -> str:
        return self._component_under_test

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def imports(self) -> List[str]:
        """Rendered `use` lines in canonical (lexicographic) order."""
        return sorted(self._imports)

    @property
    def components(self) -> Tuple[ComponentRef, ...]:
        return tuple(self._components)

    @property
    def constants(self) -> Tuple[ConstantDecl, ...]:
        return tuple(self._constants)

    @property
    def routes(self) -> Tuple[RouteSnippet, ...]:
        return tuple(self._routes)

    @property
    def mocks(self) -> Tuple[MockSkeleton, ...]:
        return tuple(self._mocks)

    @property
    def test_cases(self) -> Tuple[TestCaseSnippet, ...]:
        return tuple(self._test_cases)

    def component(self, name: str) -> Optional[ComponentRef]:
        # Last one wins when a caller adds the same name twice.
        return self._components_by_name.get(name)

    def summary(self) -> RealmSummary:
        return RealmSummary(
            components=len(self._components),
            mocks=len(self._mocks),
            routes=len(self._routes),
            test_cases=len(self._test_cases),
            imports=self.imports,
        )

    def mark_consumed(self) -> None:
        self._consumed = True

    # -- mutations -------------------------------------------------------

    def _ensure_open(self, op: str) -> None:
        if self._consumed:
            raise ConsumedBuilderError(f"{op}() called on a builder that was already emitted")

    def add_import(self, symbol: str) -> "TopologyBuilder":
        self._ensure_open("add_import")
        line = f"use {str(symbol).strip()};"
        if line not in self._imports:
            logger.debug("import %s", symbol)
        self._imports.add(line)
        return self

    def add_component(self, name: str, url: Optional[str] = None, is_mock: bool = False) -> "TopologyBuilder":
        self._ensure_open("add_component")
        var = rust_ident(name)
        if is_mock:
            function = mock_function_name(name)
            ref = ComponentRef(name=name, url=url, is_mock=True, var_name=var, mock_function=function)
            text = _LOCAL_CHILD.format(var=var, name=rust_str(name), function=function)
        else:
            if not url:
                raise InvalidTopologyError(f"component '{name}' is not a mock and has no url")
            const = const_name(name)
            self._constants.append(
                ConstantDecl(name=const, value=url, text=f'const {const}: &str = "{rust_str(url)}";')
            )
            ref = ComponentRef(name=name, url=url, is_mock=False, var_name=var)
            text = _CHILD.format(var=var, name=rust_str(name), url=const)
        self._components.append(ref)
        self._components_by_name[name] = ref
        self._routes.append(RouteSnippet(kind="component", text=text))
        logger.debug("component %s (mock=%s)", name, bool(is_mock))
        return self

    def add_mock_impl(self, component_name: str, protocol: str = "") -> "TopologyBuilder":
        self._ensure_open("add_mock_impl")
        ref = self._components_by_name.get(component_name)
        if ref is not None and ref.mock_function:
            function = ref.mock_function
        else:
            function = mock_function_name(component_name)
        text = substitute(load_template(MOCK_TEMPLATE_NAME), [("FUNCTION_NAME", function)])
        self._mocks.append(
            MockSkeleton(component_name=component_name, function_name=function, protocol=protocol, text=text)
        )
        logger.debug("mock impl %s for %s", function, protocol or "-")
        return self

    def _resolve(self, ref: str) -> str:
        if ref == ROOT_REF:
            return "Ref::parent()"
        if ref == SELF_REF:
            return f"&{rust_ident(self._component_under_test)}"
        return f"&{rust_ident(ref)}"

    def _targets_code(self, capability: str, targets: Sequence[str]) -> str:
        if not targets:
            raise InvalidTopologyError(f"route for '{capability}' has no targets")
        pad = " " * TARGET_INDENT
        return "\n".join(f"{pad}.to({self._resolve(t)})" for t in targets)

    def _named_refs(self, refs: Iterable[str]) -> tuple:
        return tuple(self._component_under_test if r == SELF_REF else r for r in refs if r != ROOT_REF)

    def _add_route(self, kind: str, capability: str, source: str, targets: Sequence[str], label: str) -> None:
        targets = [targets] if isinstance(targets, str) else list(targets)
        text = _ROUTE.format(
            capability=capability,
            source=self._resolve(source),
            targets=self._targets_code(label, targets),
        )
        self._routes.append(RouteSnippet(kind=kind, text=text, refs=self._named_refs([source, *targets])))
        logger.debug("%s route %s: %s -> %s", kind, label, source, ", ".join(targets))

    def add_protocol(self, protocol: str, source: str, targets: Sequence[str]) -> "TopologyBuilder":
        self._ensure_open("add_protocol")
        self._add_route(
            "protocol",
            f'Capability::protocol_by_name("{rust_str(protocol)}")',
            source,
            targets,
            protocol,
        )
        return self

    def add_directory(self, name: str, path: str, targets: Sequence[str]) -> "TopologyBuilder":
        self._ensure_open("add_directory")
        self._add_route(
            "directory",
            f'Capability::directory("{rust_str(name)}").path("{rust_str(path)}").rights({DIRECTORY_RIGHTS})',
            ROOT_REF,
            targets,
            name,
        )
        return self

    def add_storage(self, name: str, path: str, targets: Sequence[str]) -> "TopologyBuilder":
        self._ensure_open("add_storage")
        self._add_route(
            "storage",
            f'Capability::storage("{rust_str(name)}").path("{rust_str(path)}")',
            ROOT_REF,
            targets,
            name,
        )
        return self

    def add_test_case(self, protocol: str) -> "TopologyBuilder":
        self._ensure_open("add_test_case")
        marker, marker_var = protocol_marker(protocol)
        text = substitute(
            load_template(TEST_TEMPLATE_NAME),
            [
                ("MARKER_VAR_NAME", marker_var),
                ("MARKER", marker),
                ("PROTOCOL", rust_str(protocol)),
            ],
        )
        self._test_cases.append(TestCaseSnippet(protocol=protocol, marker=marker, marker_var=marker_var, text=text))
        logger.debug("test case %s (%s)", protocol, marker)
        return self
