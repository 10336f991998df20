"""Serialize a populated TopologyBuilder into harness source text.

Output is five sections in fixed order: imports, constants, create_realm(),
mock skeletons, test cases. Empty sections are dropped entirely; the ones
that remain are separated by exactly one blank line and the text ends with a
single newline. The same builder contents always produce the same bytes.
"""
from __future__ import annotations
import logging
from typing import List, Optional, TextIO

from .builders.topology import TopologyBuilder
from .constants import REALM_EPILOGUE, REALM_PROLOGUE
from .types import InvalidTopologyError
from .validation.topology import validate_topology

logger = logging.getLogger(__name__)


class TextEmitter:
    def __init__(self, builder: TopologyBuilder, strict: bool = False):
        self.builder = builder
        self.strict = strict

    def _realm_section(self) -> str:
        routes = [r.text for r in self.builder.routes]
        text = REALM_PROLOGUE + "\n"
        if routes:
            text += "\n".join(routes) + "\n\n"
        return text + REALM_EPILOGUE

    def sections(self) -> List[str]:
        b = self.builder
        return [
            "\n".join(b.imports),
            "\n".join(c.text for c in b.constants),
            self._realm_section(),
            "\n\n".join(m.text for m in b.mocks),
            "\n\n".join(t.text for t in b.test_cases),
        ]

    def render(self) -> str:
        """Consume the builder and return the complete harness text.

        Raises InvalidTopologyError in strict mode when the builder's cross
        references do not line up; the builder stays open in that case.
        """
        if self.strict:
            ok, errors = validate_topology(self.builder)
            if not ok:
                raise InvalidTopologyError(
                    f"invalid topology for {self.builder.component_under_test}: " + "; ".join(errors),
                    errors,
                )
        self.builder.mark_consumed()
        text = "\n\n".join(s for s in self.sections() if s) + "\n"
        summary = self.builder.summary()
        logger.info(
            "rendered harness for %s: %d components, %d routes, %d mocks, %d test cases",
            self.builder.component_under_test,
            summary.components,
            summary.routes,
            summary.mocks,
            summary.test_cases,
        )
        return text

    def write_to(self, sink: TextIO) -> int:
        # Render fully before touching the sink so a failure leaves it untouched.
        text = self.render()
        sink.write(text)
        return len(text)


def emit(builder: TopologyBuilder, strict: bool = False, sink: Optional[TextIO] = None) -> str:
    emitter = TextEmitter(builder, strict=strict)
    text = emitter.render()
    if sink is not None:
        sink.write(text)
    return text
