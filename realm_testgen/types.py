from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


class InvalidTopologyError(ValueError):
    """Raised when a caller violates a builder precondition.

    `errors` holds every problem found; single-operation failures carry one.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors: List[str] = list(errors or [message])


class ConsumedBuilderError(RuntimeError):
    """Raised when a builder is mutated after it was handed to an emitter."""


@dataclass(frozen=True)
class ComponentRef:
    name: str
    url: Optional[str]
    is_mock: bool
    # Rust local the component is bound to inside create_realm().
    var_name: str
    # Only set for mock components; shared with the matching MockSkeleton.
    mock_function: Optional[str] = None


@dataclass(frozen=True)
class ConstantDecl:
    name: str
    value: str
    text: str


@dataclass(frozen=True)
class RouteSnippet:
    kind: str  # component, protocol, directory, storage
    text: str
    # Component names referenced by this snippet; self is stored as the
    # component-under-test name, root is dropped.
    refs: tuple = ()


@dataclass(frozen=True)
class MockSkeleton:
    component_name: str
    function_name: str
    protocol: str
    text: str


@dataclass(frozen=True)
class TestCaseSnippet:
    protocol: str
    marker: str
    marker_var: str
    text: str

    __test__ = False  # not a pytest class


@dataclass
class RealmSummary:
    components: int = 0
    mocks: int = 0
    routes: int = 0
    test_cases: int = 0
    imports: List[str] = field(default_factory=list)
