"""Test data factories for deterministic test data generation."""

from tests.factories.g11n import (
    make_g11n,
    make_locale_node,
    make_resource_root,
    write_yaml,
)

__all__ = [
    "make_g11n",
    "make_locale_node",
    "make_resource_root",
    "write_yaml",
]
