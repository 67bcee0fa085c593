"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_catalog,
    make_entry,
    make_record,
)

__all__ = [
    "make_catalog",
    "make_entry",
    "make_record",
]
