"""Vendor-specific feed parsers."""
