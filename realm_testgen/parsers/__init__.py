"""Upstream readers that turn realm descriptions into builder calls."""

from .realm import build_from_doc, load_realm, load_realm_yaml, validate_realm_doc  # noqa: F401
