"""Observability helpers for step-retry."""
