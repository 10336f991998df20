from __future__ import annotations
import logging
from collections import Counter
from typing import Dict, List, Set, Tuple

from ..builders.topology import TopologyBuilder
from ..utils.naming import const_name

logger = logging.getLogger(__name__)


def validate_topology(builder: TopologyBuilder) -> Tuple[bool, List[str]]:
    """Cross-check the references a builder accepted without checking.

    Returns: (ok, errors)

    Reports duplicate component names, distinct names that collide once
    escaped (Rust identifiers, URL constants), duplicate test functions,
    routes naming components that were
    never added (including `self` when the component under test is missing),
    mock implementations for components that are not mocks, and mock
    components without an implementation.
    """
    errors: List[str] = []
    names = [c.name for c in builder.components]

    for name, count in sorted(Counter(names).items()):
        if count > 1:
            errors.append(f"duplicate component name: {name} (added {count} times)")

    # Distinct names can still escape to the same Rust identifier (a-b, a_b).
    by_var: Dict[str, Set[str]] = {}
    for c in builder.components:
        by_var.setdefault(c.var_name, set()).add(c.name)
    for var, owners in sorted(by_var.items()):
        if len(owners) > 1:
            errors.append(f"components {', '.join(sorted(owners))} share the Rust identifier {var}")

    by_const: Dict[str, Set[str]] = {}
    for c in builder.components:
        if not c.is_mock:
            by_const.setdefault(const_name(c.name), set()).add(c.name)
    for const, owners in sorted(by_const.items()):
        if len(owners) > 1:
            errors.append(f"components {', '.join(sorted(owners))} share the constant {const}")

    by_test: Dict[str, List[str]] = {}
    for tc in builder.test_cases:
        by_test.setdefault(tc.marker_var, []).append(tc.protocol)
    for var, protocols in sorted(by_test.items()):
        if len(protocols) > 1:
            errors.append(f"test function test_{var} generated {len(protocols)} times ({', '.join(protocols)})")

    known = set(names)
    for idx, route in enumerate(builder.routes):
        for ref in route.refs:
            if ref not in known:
                errors.append(f"routes[{idx}] ({route.kind}) references unknown component: {ref}")

    with_impl = set()
    for mock in builder.mocks:
        with_impl.add(mock.component_name)
        comp = builder.component(mock.component_name)
        if comp is None:
            errors.append(f"mock implementation for unknown component: {mock.component_name}")
        elif not comp.is_mock:
            errors.append(f"mock implementation for non-mock component: {mock.component_name}")
        elif comp.mock_function != mock.function_name:
            errors.append(
                f"mock function mismatch for {mock.component_name}: "
                f"route uses {comp.mock_function}, skeleton defines {mock.function_name}"
            )

    for comp in builder.components:
        if comp.is_mock and comp.name not in with_impl:
            errors.append(f"mock component without implementation: {comp.name}")

    if errors:
        logger.debug("topology validation found %d problem(s)", len(errors))
    return (not errors), errors
