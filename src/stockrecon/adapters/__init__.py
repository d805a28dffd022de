"""Adapters binding the reconciliation domain to external systems."""
