"""Catalog discovery domain."""
