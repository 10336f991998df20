from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .emitter import TextEmitter
from .parsers.realm import load_realm
from .types import InvalidTopologyError
from .utils.output import write_text_atomic


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="realm-testgen",
        description="Generate an integration-test harness from a realm description",
    )
    ap.add_argument("--realm", required=True, help="Path to the YAML realm description")
    ap.add_argument("--out", default=None, help="Path to write the generated harness (defaults to stdout)")
    ap.add_argument(
        "--strict",
        action="store_true",
        help="Reject duplicate components, dangling route references and unmatched mocks",
    )
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    log = logging.getLogger(__name__)

    try:
        builder = load_realm(args.realm)
        text = TextEmitter(builder, strict=args.strict).render()
    except InvalidTopologyError as e:
        for err in e.errors:
            log.error("%s", err)
        return 1
    except ValueError as e:
        log.error("Failed loading realm description %s: %s", args.realm, e)
        return 1

    if args.out:
        write_text_atomic(args.out, text)
        log.info("Wrote harness to %s", args.out)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
